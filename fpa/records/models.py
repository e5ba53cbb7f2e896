"""Financial record model.

Records are immutable facts: corrections arrive as new uploads or new
scenario clones, never as updates to an existing row.
"""
from sqlalchemy import Column, String, Integer, DateTime, Numeric, Index

from fpa.database import Base
from fpa.base import generate_id


class FinancialRecord(Base):
    """A single financial fact tagged by scenario, version and period."""

    __tablename__ = "financial_records"

    id = Column(String, primary_key=True, default=lambda: generate_id("rec"))

    # What is it?
    type = Column(String, nullable=False, index=True)  # Revenue, Expense, Asset, Liability
    account = Column(String, nullable=False, index=True)  # Code or resolved account name
    department = Column(String, nullable=True, index=True)

    # Period
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)  # 1-12

    # Currency-normalized amount
    amount = Column(Numeric(precision=20, scale=6), nullable=False)

    # Versioned scenario tagging
    scenario = Column(String, nullable=False, index=True)  # e.g. "Budget", "Actual"
    version = Column(String, nullable=False)  # e.g. "v1.0", "2024-07-01-120000-ab12"
    upload_timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("ix_financial_records_scenario_version", "scenario", "version"),
        Index("ix_financial_records_period", "year", "month"),
    )

    def __repr__(self):
        return (
            f"<FinancialRecord {self.id}: "
            f"{self.scenario}/{self.version} {self.account} "
            f"{self.year:04d}-{self.month:02d} {self.amount}>"
        )
