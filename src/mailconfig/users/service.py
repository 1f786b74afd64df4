"""User management service.

Only superusers may list or create users. ``seed_superuser`` exists for the
bootstrap script, which has no identity to act as yet.
"""

import logging
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from ..auth.identity import Identity
from ..auth.policy import may_create_user, may_list_all_users
from ..database import flush_or_fail
from ..errors import PermissionDenied, UserAlreadyExists
from ..models.token import MailAuthToken
from ..models.user import MailUser
from ..observability.metrics import mutations_total
from ..tokens.service import issue_token

logger = logging.getLogger(__name__)


def token_map(user: MailUser) -> Dict[str, str]:
    """A user's tokens as label -> token."""
    return {tok.label: tok.token for tok in user.tokens}


def list_users(db: Session, identity: Identity) -> List[MailUser]:
    if not may_list_all_users(identity):
        raise PermissionDenied("You may not list users")
    return db.query(MailUser).order_by(MailUser.username.asc()).all()


def _insert_user(db: Session, username: str, superuser: bool) -> MailUser:
    if db.query(MailUser).filter(MailUser.username == username).first() is not None:
        raise UserAlreadyExists(username)

    user = MailUser(username=username, superuser=superuser)
    db.add(user)
    flush_or_fail(db)

    mutations_total.labels(resource="user", action="create").inc()
    return user


def create_user(db: Session, identity: Identity, username: str, superuser: bool = False) -> MailUser:
    """Create a user (superuser only).

    Raises:
        PermissionDenied: The identity is not a superuser
        UserAlreadyExists: The username is taken
    """
    if not may_create_user(identity):
        raise PermissionDenied("You may not create users")

    user = _insert_user(db, username, superuser)
    logger.info(f"User {identity.username} created user {username} (superuser={superuser})")
    return user


def seed_superuser(db: Session, username: str, label: str = "bootstrap") -> Tuple[MailUser, MailAuthToken]:
    """Create the first superuser together with a token to act as it.

    Raises:
        UserAlreadyExists: The username is taken
    """
    user = _insert_user(db, username, True)
    token = issue_token(db, user.id, label)
    logger.info(f"Seeded superuser {username}")
    return user, token
