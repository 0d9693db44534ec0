"""API routes for FOMS requests, the status catalog, and the auth gate."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from foms.auth import Identity, get_optional_identity
from foms.config import get_settings
from foms.database import get_db
from foms.services.auth_gate import AuthGateRegistry, resolve_signed_out_redirect
from foms.services.errors import AuthorizationError, NotFoundError, ValidationError
from foms.services.mock_data import seed_mock_requests
from foms.services.query_router import ListFilters, RequestQueryRouter
from foms.services.request_store import RequestStore
from foms.services.status_catalog import StatusCatalog
from foms.services.status_transition import StatusTransition
from foms.api.schemas import (
    FomsRequestCreate,
    FomsRequestCreated,
    FomsRequestResponse,
    FomsRequestPage,
    StatusUpdate,
    MockSeedResult,
    StatusResponse,
    AuthSettingResponse,
    AuthSettingUpdate,
    AuthGateStateResponse,
    ManagedRouteResponse,
    RedirectResponse
)

router = APIRouter()

settings = get_settings()


def get_query_router(db: Session = Depends(get_db)) -> RequestQueryRouter:
    return RequestQueryRouter(db, StatusCatalog(db), default_page_size=settings.page_size)


# Request endpoints
@router.get("/requests", response_model=FomsRequestPage)
def list_requests(
    status_code: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    search_query: Optional[str] = None,
    cursor: Optional[str] = None,
    page_size: Optional[int] = Query(None, ge=1, le=settings.max_page_size),
    query_router: RequestQueryRouter = Depends(get_query_router)
):
    """
    List requests newest first, one page at a time.

    A keyword search takes precedence over the status and date filters;
    pass continue_cursor back as cursor to fetch the next page.
    """
    filters = ListFilters(
        status_code=status_code or None,
        date_from=date_from,
        date_to=date_to,
        search_query=search_query
    )
    try:
        page = query_router.list_requests(filters, cursor=cursor, page_size=page_size)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    return FomsRequestPage.model_validate(page)


@router.post("/requests", response_model=FomsRequestCreated, status_code=status.HTTP_201_CREATED)
def create_request(request_data: FomsRequestCreate, db: Session = Depends(get_db)):
    """Submit a new request. It always starts as Requested."""
    store = RequestStore(db)
    request_id = store.create_request(**request_data.model_dump())
    return FomsRequestCreated(id=request_id)


@router.post("/requests/seed-mock", response_model=MockSeedResult)
def seed_mock(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity)
):
    """Generate demo requests, five per status. Requires sign-in."""
    try:
        inserted = seed_mock_requests(db, identity)
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    return MockSeedResult(inserted=inserted)


@router.get("/requests/{request_id}", response_model=FomsRequestResponse)
def get_request(request_id: str, query_router: RequestQueryRouter = Depends(get_query_router)):
    """Get a single request with its status label."""
    request = query_router.get_request(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="FOMS request not found")
    return FomsRequestResponse.model_validate(request)


@router.put("/requests/{request_id}/status", response_model=FomsRequestResponse)
def update_request_status(
    request_id: str,
    update: StatusUpdate,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity)
):
    """
    Approve ("A") or deny ("D") a request. Requires sign-in.
    Denying requires denied_description.
    """
    transition = StatusTransition(db)
    try:
        transition.update_status(
            identity,
            request_id,
            update.status_code,
            denied_description=update.denied_description
        )
    except AuthorizationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"}
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

    request = RequestQueryRouter(db).get_request(request_id)
    return FomsRequestResponse.model_validate(request)


# Status catalog endpoints
@router.get("/statuses", response_model=List[StatusResponse])
def list_statuses(db: Session = Depends(get_db)):
    """List all statuses for filters and dropdowns."""
    return StatusCatalog(db).list()


@router.post("/statuses/seed", response_model=List[StatusResponse])
def seed_statuses(db: Session = Depends(get_db)):
    """Insert the fixed statuses that are missing. Safe to call repeatedly."""
    catalog = StatusCatalog(db)
    catalog.seed()
    return catalog.list()


# Auth gate endpoints
@router.get("/auth-gate/state", response_model=AuthGateStateResponse)
def get_auth_gate_state(db: Session = Depends(get_db)):
    """Public routes and the default landing route for signed-out visitors."""
    return AuthGateRegistry(db).get_public_state()


@router.get("/auth-gate/settings", response_model=List[AuthSettingResponse])
def list_auth_gate_settings(db: Session = Depends(get_db)):
    """All stored settings. Routes without a row require auth."""
    return AuthGateRegistry(db).list_settings()


@router.put("/auth-gate/settings", response_model=AuthSettingResponse)
def set_auth_gate_requirement(setting: AuthSettingUpdate, db: Session = Depends(get_db)):
    """Create or update whether a route requires auth."""
    return AuthGateRegistry(db).set(setting.route_path, setting.requires_auth)


@router.get("/auth-gate/routes", response_model=List[ManagedRouteResponse])
def list_manageable_routes(db: Session = Depends(get_db)):
    """The toggleable routes merged with their stored settings."""
    return AuthGateRegistry(db).manageable_routes()


@router.get("/auth-gate/redirect", response_model=RedirectResponse)
def get_signed_out_redirect(path: str, db: Session = Depends(get_db)):
    """Where a signed-out visitor on path should be sent, if anywhere."""
    state = AuthGateRegistry(db).get_public_state()
    return RedirectResponse(redirect_to=resolve_signed_out_redirect(state, path))
