"""Pydantic schemas for request/response validation."""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


# Request schemas
class FomsRequestCreate(BaseModel):
    requested_datetime: datetime
    requestor_name: str = Field(..., min_length=1)
    requestor_org: str = Field(..., min_length=1)
    requestor_phone: str = Field(..., min_length=1)
    facility: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    poc_phone: str = Field(..., min_length=1)
    dfl_code: Optional[str] = None
    restoration: Optional[str] = None
    scheduled: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class FomsRequestCreated(BaseModel):
    id: str


class FomsRequestResponse(BaseModel):
    id: str
    create_datetime: datetime
    requested_datetime: datetime
    requestor_name: str
    requestor_org: str
    requestor_phone: str
    facility: str
    description: str
    contact: str
    poc_phone: str
    status_code: str
    status_value: str
    status_badge: str
    dfl_code: Optional[str]
    restoration: Optional[str]
    scheduled: Optional[str]
    denied_description: Optional[str]
    search_text: Optional[str]

    class Config:
        from_attributes = True


class FomsRequestPage(BaseModel):
    page: List[FomsRequestResponse]
    is_done: bool
    continue_cursor: str

    class Config:
        from_attributes = True


class StatusUpdate(BaseModel):
    status_code: str = Field(..., min_length=1, max_length=1)
    denied_description: Optional[str] = None


class MockSeedResult(BaseModel):
    inserted: int


# Status catalog schemas
class StatusResponse(BaseModel):
    status_code: str
    label: str

    class Config:
        from_attributes = True


# Auth gate schemas
class AuthSettingResponse(BaseModel):
    route_path: str
    requires_auth: bool

    class Config:
        from_attributes = True


class AuthSettingUpdate(BaseModel):
    route_path: str = Field(..., min_length=1)
    requires_auth: bool


class AuthGateStateResponse(BaseModel):
    default_public_route: Optional[str]
    public_paths: List[str]

    class Config:
        from_attributes = True


class ManagedRouteResponse(BaseModel):
    path: str
    label: str
    requires_auth: bool

    class Config:
        from_attributes = True


class RedirectResponse(BaseModel):
    """Where a signed-out visitor should go; null means stay."""
    redirect_to: Optional[str]
