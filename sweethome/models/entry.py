"""Entry row model for the SQL store."""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from sweethome.database import Base


class EntryRow(Base):
    """One entry record stored as a JSON document."""

    __tablename__ = "entry"

    id = Column(String(64), primary_key=True)
    status = Column(String(32), nullable=False, index=True)  # UPLOADED, PROCESSING, READY, FAILED, REPLIED
    created_at = Column(String(40), nullable=False)
    document = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
