import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func


def new_record_id() -> str:
    return str(uuid.uuid4())


class UUIDPrimaryKeyMixin:
    # Opaque identifier generated client-side, never reused
    id = Column(String(36), primary_key=True, default=new_record_id)


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now()
    )
