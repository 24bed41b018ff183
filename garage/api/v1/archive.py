from typing import List, Optional

from fastapi import APIRouter, File, Form, UploadFile

from garage.schemas.common import success_response
from garage.services import archive_service

router = APIRouter(prefix="/archive")


@router.post("/files", summary="Upload scanned invoices into a year bucket")
def upload_files(
    year:  Optional[str]              = Form(None),
    files: Optional[List[UploadFile]] = File(None),
):
    data = archive_service.store_files(year, files or [])
    return success_response(f"{len(data['files'])} file(s) archived", data)


@router.get("/files/{year}", summary="List archived files for a year")
def list_files(year: str):
    return success_response("Archived files retrieved", archive_service.list_files(year))
