"""Record store interface and implementations."""
from fpa.store.base import RecordFilter, RecordStore
from fpa.store.memory import InMemoryRecordStore
from fpa.store.sql import SqlRecordStore

__all__ = ["RecordFilter", "RecordStore", "InMemoryRecordStore", "SqlRecordStore"]
