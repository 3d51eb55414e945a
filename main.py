from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional
import uvicorn
import logging
import os
import requests

from parsers import ExtractionError, extract_records, extract_records_from_bytes
from insights import build_report

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Class Wrapped API")

CORS_ALLOW_ORIGINS = [o.strip() for o in os.environ.get("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))
FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS", "30"))
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS = {
    "no_text": 422,
    "no_records": 422,
    "no_records_for_year": 404,
    "unreadable_document": 400,
    "download_failed": 502,
    "upload_too_large": 413,
}


class TextReportRequest(BaseModel):
    text: str
    page_count: Optional[int] = None
    year: Optional[int] = None


class FetchReportRequest(BaseModel):
    url: str
    year: Optional[int] = None


def _error(code: str, message: str) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS.get(code, 400), detail={"code": code, "message": message})


def _print_progress(fraction: float):
    print(f"Extracting text... {round(fraction * 100)}%")


def report_from_pdf(pdf_bytes: bytes, year: Optional[int]) -> dict:
    print(f"Processing PDF ({len(pdf_bytes)} bytes)")
    try:
        records = extract_records_from_bytes(pdf_bytes, on_progress=_print_progress)
        report = build_report(records, year=year)
    except ExtractionError as e:
        print(f"Report failed: {e.code}: {e.message}")
        raise _error(e.code, e.message) from e

    print(f"Processed {len(records)} records, {len(report['records'])} in {report['year']}")
    return report


def report_from_text(text: str, page_count: Optional[int], year: Optional[int]) -> dict:
    print(f"Processing text ({len(text)} chars, page_count={page_count})")
    try:
        records = extract_records(text, page_count=page_count)
        report = build_report(records, year=year)
    except ExtractionError as e:
        print(f"Report failed: {e.code}: {e.message}")
        raise _error(e.code, e.message) from e

    print(f"Processed {len(records)} records, {len(report['records'])} in {report['year']}")
    return report


def download_pdf(url: str) -> bytes:
    print(f"Downloading PDF. URL: {url}")
    try:
        response = requests.get(url, timeout=FETCH_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.RequestException as e:
        print(f"Download failed: {e}")
        raise _error("download_failed", f"Could not download the PDF: {e}") from e

    if len(response.content) > MAX_UPLOAD_BYTES:
        raise _error("upload_too_large", f"PDF is larger than {MAX_UPLOAD_BYTES} bytes.")
    return response.content


@app.get("/")
def read_root():
    return {"status": "ok", "message": "Class Wrapped API is running"}


@app.post("/reports")
async def create_report(request: Request, year: Optional[int] = None):
    """
    Raw PDF upload (request body is the file itself).
    """
    body = await request.body()
    if len(body) > MAX_UPLOAD_BYTES:
        raise _error("upload_too_large", f"PDF is larger than {MAX_UPLOAD_BYTES} bytes.")
    return await run_in_threadpool(report_from_pdf, body, year)


@app.post("/reports/text")
async def create_report_from_text(payload: TextReportRequest):
    return await run_in_threadpool(report_from_text, payload.text, payload.page_count, payload.year)


@app.post("/reports/fetch")
async def create_report_from_url(payload: FetchReportRequest):
    pdf_bytes = await run_in_threadpool(download_pdf, payload.url)
    return await run_in_threadpool(report_from_pdf, pdf_bytes, payload.year)


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
