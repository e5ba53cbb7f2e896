"""
Change history model for the record audit trail.

Every FinancialRecord creation event appends one entry here. Entries are
never updated or deleted.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from fpa.database import Base
from fpa.base import generate_id


class ChangeAction:
    """Action tags written to the change history."""
    IMPORTED = "Imported"
    CLONED = "Cloned"


class ChangeHistory(Base):
    """Append-only audit fact for a financial record."""

    __tablename__ = "change_history"

    id = Column(String, primary_key=True, default=lambda: generate_id("audit"))
    record_id = Column(String, ForeignKey("financial_records.id"), nullable=False, index=True)

    # What happened?
    action = Column(String, nullable=False, index=True)
    # Options:
    # - "Imported": created by a spreadsheet upload
    # - "Cloned": created by a scenario clone

    # Who and when? (caller identity is passed through opaquely)
    user_name = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        Index("ix_change_history_record_time", "record_id", "timestamp"),
    )

    def __repr__(self):
        return (
            f"<ChangeHistory {self.id}: "
            f"{self.action} on {self.record_id} by {self.user_name} "
            f"at {self.timestamp}>"
        )
