"""Data access layer for the durable form-state slot"""

from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from loan_wizard.config import settings
from loan_wizard.infrastructure.database.models import FormStateSlot


class SlotRepository:
    """Repository for key-value slot rows"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        """Fetch the raw stored value, or None when the slot is absent"""
        row = self.db.get(FormStateSlot, key)
        return row.value if row is not None else None

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite the slot value"""
        row = self.db.get(FormStateSlot, key)
        if row is None:
            self.db.add(FormStateSlot(key=key, value=value))
        else:
            row.value = value
        self.db.flush()

    def delete(self, key: str) -> None:
        row = self.db.get(FormStateSlot, key)
        if row is not None:
            self.db.delete(row)
            self.db.flush()


class DurableSlot:
    """
    Single named slot holding one serialized value.

    Every read and write runs in its own short session and commits before
    returning, so a completed write is durable.
    """

    def __init__(self, session_factory: sessionmaker, key: str | None = None):
        self.session_factory = session_factory
        self.key = key or settings.storage_key

    def read(self) -> Optional[str]:
        with self.session_factory() as db:
            return SlotRepository(db).get(self.key)

    def write(self, value: str) -> None:
        with self.session_factory() as db:
            SlotRepository(db).put(self.key, value)
            db.commit()

    def erase(self) -> None:
        with self.session_factory() as db:
            SlotRepository(db).delete(self.key)
            db.commit()
