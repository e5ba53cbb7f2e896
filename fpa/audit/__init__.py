"""Audit trail for financial record creation."""
from fpa.audit.models import ChangeAction, ChangeHistory

__all__ = ["ChangeAction", "ChangeHistory"]
