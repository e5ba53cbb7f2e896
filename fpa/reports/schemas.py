"""Report schemas."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class SummaryRow(BaseModel):
    """Total per account/department/scenario."""
    account: str
    department: Optional[str] = None
    scenario: str
    total_amount: Decimal


class MonthlyRow(BaseModel):
    """Total per "YYYY-MM" period."""
    month: str
    total: Decimal
