"""User management endpoints (superuser only).

The routes are gated by ``require_permission``; the service repeats the check
for callers that do not come through HTTP.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import require_permission
from ..auth.identity import Identity
from ..auth.policy import may_create_user, may_list_all_users
from ..database import get_db
from .schemas import CreateUserRequest, UserEntry, UserListResponse
from .service import create_user, list_users


router = APIRouter(prefix="/user", tags=["User Management"])


@router.get("/list", response_model=UserListResponse)
def list_all_users(
    identity: Identity = Depends(require_permission(may_list_all_users, "You may not list users")),
    db: Session = Depends(get_db),
) -> UserListResponse:
    users = list_users(db, identity)
    return UserListResponse(users={user.username: UserEntry.from_user(user) for user in users})


@router.post("/new", response_model=UserEntry)
def new_user(
    data: CreateUserRequest,
    identity: Identity = Depends(require_permission(may_create_user, "You may not create users")),
    db: Session = Depends(get_db),
) -> UserEntry:
    """Create a user (superuser only). The new user starts without tokens.

    Raises:
        403: Caller is not a superuser
        400: Username already taken
    """
    user = create_user(db, identity, data.username, superuser=data.superuser)
    db.commit()
    return UserEntry.from_user(user)
