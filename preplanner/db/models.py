"""
Database table definitions and it stores:
- Registered projects (id, name, tech)
Main purpose:
Opaque key-value store behind project registration.
"""



from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from preplanner.db.base import Base

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Project(Base):
    __tablename__ = "projects"
    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    tech: Mapped[str] = mapped_column(String)  # react_ts
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
