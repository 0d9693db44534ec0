"""
Per-route auth gate.

Admins toggle whether a route requires sign-in. When exactly one route is
public, signed-out visitors are sent there by default.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from foms.models.domain import AuthSetting

logger = logging.getLogger(__name__)


# Routes the admin page can toggle: (path, label)
MANAGEABLE_ROUTES = (
    ("/", "Home"),
    ("/foms", "FOMS"),
    ("/foms/create", "New request"),
    ("/anotherPage", "Another page"),
)


@dataclass
class AuthGateState:
    default_public_route: Optional[str]
    public_paths: List[str] = field(default_factory=list)


@dataclass
class ManagedRoute:
    path: str
    label: str
    requires_auth: bool


class AuthGateRegistry:
    """Repository over route_path -> requires_auth rows."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, path: str) -> Optional[AuthSetting]:
        return self.db.query(AuthSetting).filter(AuthSetting.route_path == path).first()

    def get(self, path: str) -> bool:
        """Whether the route requires auth. No row means it does."""
        row = self._row(path)
        if row is None:
            return True
        return row.requires_auth

    def set(self, path: str, requires_auth: bool) -> AuthSetting:
        """Create or update the row for path."""
        row = self._row(path)
        if row is None:
            row = AuthSetting(route_path=path, requires_auth=requires_auth)
            self.db.add(row)
        else:
            row.requires_auth = requires_auth
        self.db.commit()
        self.db.refresh(row)

        logger.info("Auth gate for %s set to requires_auth=%s", path, requires_auth)
        return row

    def list_settings(self) -> List[AuthSetting]:
        return self.db.query(AuthSetting).order_by(AuthSetting.id).all()

    def get_public_state(self) -> AuthGateState:
        """
        Collect every explicitly public path.

        A default public route is designated only when exactly one path is
        public; zero or several leave the app sign-in only.
        """
        public_paths = [row.route_path for row in self.list_settings() if not row.requires_auth]
        default_public_route = public_paths[0] if len(public_paths) == 1 else None
        return AuthGateState(
            default_public_route=default_public_route,
            public_paths=public_paths
        )

    def manageable_routes(self) -> List[ManagedRoute]:
        """The toggleable routes with their stored setting (default: requires auth)."""
        stored = {row.route_path: row.requires_auth for row in self.list_settings()}
        return [
            ManagedRoute(path=path, label=label, requires_auth=stored.get(path, True))
            for path, label in MANAGEABLE_ROUTES
        ]


def resolve_signed_out_redirect(state: AuthGateState, pathname: str) -> Optional[str]:
    """
    Where a signed-out visitor on pathname should be sent, or None to stay.

    Only applies when there is a default public route. The home page and any
    non-public path redirect to it; public paths stay put.
    """
    if not state.default_public_route:
        return None
    if pathname == "/":
        return state.default_public_route
    if pathname not in state.public_paths:
        return state.default_public_route
    return None
