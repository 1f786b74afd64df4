"""FastAPI dependencies for authentication and authorization.

This module provides the guards applied at the routing layer:
- Extracting the bearer token and resolving it to an Identity
- Enforcing superuser-only routes via the policy predicates

Usage:
    router = APIRouter(dependencies=[Depends(get_identity)])

    @router.get("/list")
    def list_things(identity: Identity = Depends(get_identity)):
        ...

    @router.post("/new")
    def create_thing(identity: Identity = Depends(require_permission(may_create_user, "..."))):
        ...
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import PermissionDenied
from ..observability.context import set_actor
from .identity import Identity
from .tokens import resolve_identity

# auto_error=False so that a missing header reaches resolve_identity and is
# reported as AuthNoToken rather than FastAPI's own 403
security = HTTPBearer(auto_error=False)


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve the request's bearer token to an Identity.

    Declared async so the actor is recorded in the request's own context;
    sync dependencies run in a worker thread whose context is discarded.
    The token lookup itself still runs in the threadpool.

    Raises:
        AuthNoToken: If no ``Authorization: Bearer`` header was sent
        AuthBadToken: If the token is unknown
    """
    token = credentials.credentials if credentials else None
    identity = await run_in_threadpool(resolve_identity, db, token)
    set_actor(identity.username)
    return identity


def require_permission(predicate: Callable[[Identity], bool], why: str) -> Callable:
    """Create a dependency that admits only identities passing ``predicate``.

    Args:
        predicate: One of the policy predicates, e.g. ``may_create_user``
        why: Subject of the PermissionDenied raised otherwise

    Example:
        @router.post("/new")
        def create_user(identity: Identity = Depends(
            require_permission(may_create_user, "You may not create users")
        )):
            ...
    """

    def permission_dependency(identity: Identity = Depends(get_identity)) -> Identity:
        if not predicate(identity):
            raise PermissionDenied(why)
        return identity

    return permission_dependency


CurrentIdentity = Annotated[Identity, Depends(get_identity)]
