from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from garage.database import get_db
from garage.schemas.invoice import InvoiceCreateRequest
from garage.schemas.common import success_response
from garage.services.invoice_service import invoice_service

router = APIRouter(prefix="/invoices")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Generate an invoice for a vehicle")
def create_invoice(body: InvoiceCreateRequest, db: Session = Depends(get_db)):
    invoice_id = invoice_service.create_invoice(db, body)
    return success_response("Invoice created successfully", {"invoice_id": invoice_id})


@router.get("", summary="List invoices")
def list_invoices(db: Session = Depends(get_db)):
    return success_response("Invoices retrieved", invoice_service.list_invoices(db))


@router.get("/{invoice_id}", summary="Get invoice with items")
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return success_response("Invoice retrieved", invoice_service.get_invoice(db, invoice_id))


@router.get("/{invoice_id}/pdf", summary="Download invoice (PDF)")
def invoice_pdf(invoice_id: int, db: Session = Depends(get_db)):
    content = invoice_service.invoice_pdf(db, invoice_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice_{invoice_id}.pdf"'},
    )


@router.delete("/{invoice_id}", summary="Delete invoice with its items")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice_service.delete_invoice(db, invoice_id)
    return success_response("Invoice deleted successfully", None)
