"""Scenario cloning and comparison schemas."""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class Adjustment(BaseModel):
    """
    Multiplicative adjustment applied while cloning.

    Matches a record when the account (if set) or the department (if set)
    is equal. With neither set it matches nothing.
    """
    account: Optional[str] = None
    department: Optional[str] = None
    factor: Decimal


class ScenarioCloneRequest(BaseModel):
    """
    Request to derive a new scenario from an existing one.

    Accepts the camelCase keys used by the report query parameters
    (baseScenario, newScenario, baseVersion) as well as field names.
    """
    base_scenario: str = Field(..., alias="baseScenario")
    new_scenario: str = Field(..., alias="newScenario")
    adjustments: List[Adjustment] = Field(default_factory=list)
    base_version: Optional[str] = Field(
        default=None,
        alias="baseVersion",
        description="Clone only this version of the base scenario",
    )

    model_config = {"populate_by_name": True}


class ScenarioCloneResponse(BaseModel):
    """Response after a successful clone."""
    message: str
    new_scenario: str
    version: str


class ComparisonRow(BaseModel):
    """Per-account (or per account/department) comparison of two scenarios."""
    account: str
    department: Optional[str] = None
    base_amount: Decimal
    target_amount: Decimal
    delta: Decimal
    percentage: Decimal
