"""Bearer token resolution.

A presented token is looked up in storage and, if known, turned into the
``Identity`` of its owner. This is the mandatory gate in front of every
domain-scoped operation; it never writes.
"""

import logging
import secrets
from typing import Optional

from sqlalchemy.orm import Session

from ..errors import AuthBadToken, AuthNoToken
from ..models.token import MailAuthToken
from ..models.user import MailUser
from ..observability.metrics import auth_failures_total
from .identity import Identity

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16


def generate_token_value() -> str:
    """Generate a fresh random token value (32 hex characters)."""
    return secrets.token_hex(TOKEN_BYTES)


def find_token(db: Session, token: str) -> Optional[MailAuthToken]:
    return db.query(MailAuthToken).filter(MailAuthToken.token == token).first()


def resolve_identity(db: Session, presented_token: Optional[str]) -> Identity:
    """Resolve a presented bearer token to the identity it belongs to.

    Args:
        db: Database session
        presented_token: Token from the Authorization header, or None if absent

    Returns:
        Identity: The owning user's identity for this request

    Raises:
        AuthNoToken: No token was presented
        AuthBadToken: The token does not match any stored token
    """
    if not presented_token:
        auth_failures_total.labels(reason="no_token").inc()
        raise AuthNoToken()

    db_token = find_token(db, presented_token)
    if db_token is None:
        auth_failures_total.labels(reason="bad_token").inc()
        logger.warning("Rejected unknown bearer token")
        raise AuthBadToken(presented_token)

    user = db.get(MailUser, db_token.mailuser)
    return Identity.from_rows(db_token, user)
