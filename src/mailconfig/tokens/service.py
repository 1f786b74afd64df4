"""Token management for the calling identity.

Users create and revoke their own tokens only. The token authenticating the
current request cannot revoke itself.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..auth.identity import Identity
from ..auth.tokens import find_token, generate_token_value
from ..database import flush_or_fail
from ..errors import BadToken, TokenInUse
from ..models.token import MailAuthToken
from ..observability.metrics import mutations_total

logger = logging.getLogger(__name__)


def list_tokens(db: Session, identity: Identity) -> List[MailAuthToken]:
    return db.query(MailAuthToken).filter(
        MailAuthToken.mailuser == identity.user_id
    ).order_by(MailAuthToken.id).all()


def issue_token(db: Session, user_id: int, label: str) -> MailAuthToken:
    token = MailAuthToken(mailuser=user_id, token=generate_token_value(), label=label)
    db.add(token)
    flush_or_fail(db)
    mutations_total.labels(resource="token", action="create").inc()
    return token


def create_token(db: Session, identity: Identity, label: str) -> MailAuthToken:
    token = issue_token(db, identity.user_id, label)
    logger.info(f"Created token '{label}' for {identity.username}")
    return token


def revoke_token(db: Session, identity: Identity, token: str) -> str:
    """Revoke one of the caller's tokens, returning its label.

    Raises:
        TokenInUse: ``token`` is the one authenticating this request
        BadToken: ``token`` is unknown or belongs to someone else
    """
    if token == identity.token:
        raise TokenInUse(token)

    db_token = find_token(db, token)
    if db_token is None or db_token.mailuser != identity.user_id:
        raise BadToken(token)

    label = db_token.label
    db.delete(db_token)
    flush_or_fail(db)

    mutations_total.labels(resource="token", action="revoke").inc()
    logger.info(f"Revoked token '{label}' of {identity.username}")
    return label
