"""
Ingestion Pipeline - turns parsed upload rows into stored records.

Flow:
    raw rows -> account + FX resolution -> one batch write -> audit entries

All lookups finish before anything is written, so a failing lookup leaves
the store untouched. Audit entries are written only after the batch has
committed.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from fpa.audit.services import AuditService
from fpa.config import settings
from fpa.errors import ValidationError
from fpa.lookups.resolver import LookupResolver
from fpa.records.models import FinancialRecord
from fpa.records.schemas import RawRecord
from fpa.store.base import RecordStore
from fpa.versions import generate_version, utc_now

logger = logging.getLogger(__name__)


async def process_upload(
    store: RecordStore,
    raw_records: Sequence[RawRecord],
    scenario: str,
    version: Optional[str] = None,
    user_name: Optional[str] = None,
    resolver: Optional[LookupResolver] = None,
) -> List[FinancialRecord]:
    """
    Normalize and store an uploaded batch under one scenario/version.

    Args:
        store: Record store to write to
        raw_records: Parsed rows in upload order
        scenario: Scenario the batch belongs to
        version: Version tag; generated from the upload time when empty
        user_name: Uploader recorded in the audit trail
        resolver: Lookup resolver; defaults to one over the same store

    Returns:
        The stored records, in upload order
    """
    if not scenario:
        raise ValidationError("Scenario is required for an upload.")

    upload_timestamp = utc_now()
    version = version or generate_version(upload_timestamp)
    user_name = user_name or settings.SYSTEM_USER_NAME
    resolver = resolver or LookupResolver(store)

    records = []
    for raw in raw_records:
        records.append(
            FinancialRecord(
                type=raw.type,
                account=await resolver.resolve_account(raw.account),
                department=raw.department,
                year=raw.year,
                month=raw.month,
                amount=await resolver.convert_amount(Decimal(raw.amount), raw.year, raw.month),
                scenario=scenario,
                version=version,
                upload_timestamp=upload_timestamp,
            )
        )

    if not records:
        logger.info(f"Empty upload for {scenario}/{version}, nothing stored")
        return []

    stored = await store.add_records(records)
    logger.info(f"Ingested {len(stored)} records into {scenario}/{version} for {user_name}")

    audit = AuditService(store, user_name=user_name)
    await audit.log_imported(stored, upload_timestamp)

    return stored
