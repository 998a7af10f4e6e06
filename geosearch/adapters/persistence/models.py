"""SQLAlchemy ORM models — cached provider payloads."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from geosearch.adapters.persistence.database import Base


class CacheEntryModel(Base):
    __tablename__ = "geocode_cache"

    key: Mapped[str] = mapped_column(String(2048), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
