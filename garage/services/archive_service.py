"""
Year-bucketed file store for scanned paper invoices.

Files live under <UPLOAD_ROOT>/invoices/<year>/ and are served statically
under /uploads/invoices/<year>/<name>. Nothing here touches the database.
"""
import logging
import os
import re
import shutil
import time

from fastapi import UploadFile

from garage.config import settings
from garage.utils.exceptions import InvalidYearException, ValidationException

logger = logging.getLogger(__name__)

YEAR_RE = re.compile(r"^\d{4}$")
UNSAFE_CHARS_RE = re.compile(r"[^\w.\-() ]+", re.ASCII)
MAX_FILES = 20


def _check_year(year: str | None) -> str:
    year = (year or "").strip()
    if not YEAR_RE.match(year):
        raise InvalidYearException()
    return year


def safe_filename(name: str) -> str:
    return UNSAFE_CHARS_RE.sub("_", os.path.basename(name or "file"))


def _url(year: str, name: str) -> str:
    return f"/uploads/invoices/{year}/{name}"


def store_files(year: str | None, files: list[UploadFile]) -> dict:
    year = _check_year(year)
    if len(files) > MAX_FILES:
        raise ValidationException(f"At most {MAX_FILES} files per upload", field="files")
    dest = os.path.join(settings.invoice_archive_dir, year)
    os.makedirs(dest, exist_ok=True)

    stored = []
    for upload in files:
        filename = f"{int(time.time() * 1000)}_{safe_filename(upload.filename)}"
        path = os.path.join(dest, filename)
        with open(path, "wb") as out:
            shutil.copyfileobj(upload.file, out)
        stored.append({
            "original_name": upload.filename,
            "filename":      filename,
            "url":           _url(year, filename),
            "size":          os.path.getsize(path),
            "mimetype":      upload.content_type,
        })
    logger.info(f"Archived {len(stored)} file(s) under {year}")
    return {"year": year, "files": stored}


def list_files(year: str) -> dict:
    year = _check_year(year)
    directory = os.path.join(settings.invoice_archive_dir, year)
    if not os.path.isdir(directory):
        return {"year": year, "files": []}
    names = sorted(n for n in os.listdir(directory) if os.path.isfile(os.path.join(directory, n)))
    return {"year": year, "files": [{"name": n, "url": _url(year, n)} for n in names]}
