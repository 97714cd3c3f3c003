import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from ..db.session import Base
from datetime import datetime

class Severity(str, enum.Enum):
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

class AlertStatus(str, enum.Enum):
    open = "open"
    resolved = "resolved"

class Alert(Base):
    __tablename__ = "alerts"
    id = Column(Integer, primary_key=True, index=True)
    reading_id = Column(Integer, ForeignKey("readings.id", ondelete="CASCADE"), index=True, nullable=False)
    severity = Column(Enum(Severity, native_enum=False), nullable=False)
    message = Column(String, nullable=False)
    status = Column(Enum(AlertStatus, native_enum=False), nullable=False, default=AlertStatus.open)
    resolved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    reading = relationship("Reading")
