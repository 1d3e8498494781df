"""SQLAlchemy ORM models for the durable form-state slot"""

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FormStateSlot(Base):
    """Key-value row holding a JSON-serialized partial application"""

    __tablename__ = "form_state_slot"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
