"""Domain models - requests, the status catalog, and per-route auth settings."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, Index
from foms.database import Base


class FomsRequest(Base):
    """
    A facility-access request tracked from Requested to Approved or Denied.

    Invariants:
    - id and create_datetime never change after insert
    - status_code is always one of the StatusCode values (set by the service layer)
    - search_text always matches the fields it is built from (see services.search_text)
    """
    __tablename__ = "foms_requests"

    # Server-generated, doubles as the displayed reference number
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    create_datetime = Column(DateTime, nullable=False, default=datetime.utcnow)
    requested_datetime = Column(DateTime, nullable=False)

    requestor_name = Column(String, nullable=False)
    requestor_org = Column(String, nullable=False)
    requestor_phone = Column(String, nullable=False)
    facility = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    contact = Column(String, nullable=False)
    poc_phone = Column(String, nullable=False)
    status_code = Column(String(1), nullable=False, default="R")

    # Optional
    dfl_code = Column(String, nullable=True)
    restoration = Column(String, nullable=True)
    scheduled = Column(String, nullable=True)
    denied_description = Column(Text, nullable=True)  # Only when denied

    # Derived, feeds keyword search
    search_text = Column(Text, nullable=True)

    __table_args__ = (
        Index("ix_foms_requests_status_code", "status_code"),
        Index("ix_foms_requests_requested_datetime", "requested_datetime"),
        Index("ix_foms_requests_create_datetime", "create_datetime"),
        Index("ix_foms_requests_status_requested", "status_code", "requested_datetime"),
    )


class FomsStatus(Base):
    """
    Status catalog row mapping a code to its display label.

    Seeded once, read-only afterwards. status_code is unique so a racing
    seed cannot leave two rows for the same code.
    """
    __tablename__ = "foms_status"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    status_code = Column(String(1), nullable=False, unique=True)
    label = Column(String, nullable=False)


class AuthSetting(Base):
    """Whether a route requires sign-in. A missing row means it does."""
    __tablename__ = "component_auth_settings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    route_path = Column(String, nullable=False, unique=True)
    requires_auth = Column(Boolean, nullable=False, default=True)
