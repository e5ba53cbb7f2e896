"""Financial record routes: upload, listing and audit trail."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from fpa.config import settings
from fpa.dependencies import get_store
from fpa.records import queries
from fpa.records.ingestion import process_upload
from fpa.records.schemas import ChangeHistoryResponse, FinancialRecordResponse, UploadResponse
from fpa.store.base import RecordStore
from fpa.uploads.parser import parse_workbook
from fpa.versions import generate_version

router = APIRouter()
audit_router = APIRouter()


@router.post("/upload", response_model=UploadResponse)
async def upload_excel(
    file: UploadFile = File(...),
    scenario: str = Form("Default"),
    version: Optional[str] = Form(None),
    user_name: str = Form(settings.SYSTEM_USER_NAME, alias="userName"),
    store: RecordStore = Depends(get_store),
):
    """Parse an uploaded workbook and ingest it under a scenario/version."""
    raw_records = parse_workbook(await file.read())
    version = version or generate_version()
    await process_upload(store, raw_records, scenario, version, user_name)
    return UploadResponse(
        count=len(raw_records),
        scenario=scenario,
        version=version,
        user_name=user_name,
    )


@router.get("", response_model=List[FinancialRecordResponse])
async def get_records(
    scenario: Optional[str] = None,
    account: Optional[str] = None,
    type: Optional[str] = None,
    department: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    """List records, newest upload first, with optional substring filters."""
    return await queries.list_records(store, scenario, account, type, department)


@router.get("/type/{type}", response_model=List[FinancialRecordResponse])
async def get_records_by_type(type: str, store: RecordStore = Depends(get_store)):
    """List records of one type."""
    return await queries.get_by_type(store, type)


@audit_router.get("/{record_id}/audit", response_model=List[ChangeHistoryResponse])
async def get_record_audit_trail(record_id: str, store: RecordStore = Depends(get_store)):
    """Change history for a record, newest first."""
    return await queries.get_audit_trail(store, record_id)
