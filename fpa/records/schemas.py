"""Financial record schemas."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class RawRecord(BaseModel):
    """A parsed spreadsheet row before account/FX resolution."""
    type: str
    account: str
    department: Optional[str] = None
    year: int
    month: int = Field(..., ge=1, le=12)
    amount: Decimal


class FinancialRecordResponse(BaseModel):
    """Schema for financial record response."""
    id: str
    type: str
    account: str
    department: Optional[str] = None
    year: int
    month: int
    amount: Decimal
    scenario: str
    version: str
    upload_timestamp: datetime

    model_config = {"from_attributes": True}


class UploadResponse(BaseModel):
    """Response after an upload has been ingested."""
    count: int
    scenario: str
    version: str
    user_name: str
    message: str = "Excel data uploaded successfully"


class ChangeHistoryResponse(BaseModel):
    """Schema for a change history entry."""
    id: str
    record_id: str
    action: str
    user_name: str
    timestamp: datetime

    model_config = {"from_attributes": True}
