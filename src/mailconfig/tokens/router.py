"""Token endpoints: every authenticated user manages their own tokens."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import CurrentIdentity
from ..database import get_db
from .schemas import (
    CreateTokenRequest,
    CreateTokenResponse,
    RevokeTokenRequest,
    RevokeTokenResponse,
    TokenEntry,
    TokenListResponse,
)
from .service import create_token, list_tokens, revoke_token


router = APIRouter(prefix="/token", tags=["Tokens"])


@router.get("/list", response_model=TokenListResponse)
def list_my_tokens(identity: CurrentIdentity, db: Session = Depends(get_db)) -> TokenListResponse:
    tokens = list_tokens(db, identity)
    return TokenListResponse(
        username=identity.username,
        used_token=identity.token,
        tokens=[TokenEntry(token=tok.token, label=tok.label) for tok in tokens],
    )


@router.post("/create", response_model=CreateTokenResponse)
def create_my_token(
    data: CreateTokenRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> CreateTokenResponse:
    token = create_token(db, identity, data.label)
    value = token.token
    db.commit()
    return CreateTokenResponse(token=value)


@router.post("/revoke", response_model=RevokeTokenResponse)
def revoke_my_token(
    data: RevokeTokenRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> RevokeTokenResponse:
    """Revoke one of the caller's tokens.

    Raises:
        400: The token is the one used for this request
        403: Unknown token, or a token of another user
    """
    label = revoke_token(db, identity, data.token)
    db.commit()
    return RevokeTokenResponse(label=label)
