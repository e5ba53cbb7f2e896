"""Lookup table schemas."""
from decimal import Decimal

from pydantic import BaseModel, Field


class FXRateCreate(BaseModel):
    """Schema for uploading an FX rate."""
    from_currency: str = Field(..., pattern="^[A-Z]{3}$")
    to_currency: str = Field(..., pattern="^[A-Z]{3}$")
    rate: Decimal = Field(..., gt=0)
    period: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="e.g. 2024-01")


class FXRateResponse(BaseModel):
    """Schema for FX rate response."""
    id: str
    from_currency: str
    to_currency: str
    rate: Decimal
    period: str

    model_config = {"from_attributes": True}


class AccountMapCreate(BaseModel):
    """Schema for uploading an account map entry."""
    account_code: str = Field(..., min_length=1)
    account_name: str = Field(..., min_length=1)


class AccountMapResponse(BaseModel):
    """Schema for account map response."""
    id: str
    account_code: str
    account_name: str

    model_config = {"from_attributes": True}


class LookupUploadResponse(BaseModel):
    """Response after adding lookup entries."""
    message: str
    count: int
