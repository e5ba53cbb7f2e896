"""Lookup table models: FX rates and account maps."""
from sqlalchemy import Column, String, Numeric, Index

from fpa.database import Base
from fpa.base import generate_id


class FXRate(Base):
    """Exchange rate for a currency pair in a single "YYYY-MM" period."""

    __tablename__ = "fx_rates"

    id = Column(String, primary_key=True, default=lambda: generate_id("fxrate"))
    from_currency = Column(String, nullable=False, index=True)
    to_currency = Column(String, nullable=False, index=True)
    rate = Column(Numeric(precision=18, scale=8), nullable=False)
    period = Column(String, nullable=False, index=True)  # e.g. "2024-01"

    # Duplicates per key are a caller error; lookups take the first match
    __table_args__ = (
        Index("ix_fx_rate_pair_period", "from_currency", "to_currency", "period"),
    )


class AccountMap(Base):
    """Maps a raw account code to its canonical account name."""

    __tablename__ = "account_maps"

    id = Column(String, primary_key=True, default=lambda: generate_id("acctmap"))
    account_code = Column(String, nullable=False, index=True)
    account_name = Column(String, nullable=False)
