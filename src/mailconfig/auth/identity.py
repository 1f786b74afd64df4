"""The identity a request acts as."""

from dataclasses import dataclass

from ..models.token import MailAuthToken
from ..models.user import MailUser


@dataclass(frozen=True)
class Identity:
    """Who is calling, resolved fresh from the presented bearer token.

    Never persisted; derived from the stored user and token rows and passed
    explicitly into every service call.
    """
    token: str
    user_id: int
    username: str
    is_superuser: bool

    @classmethod
    def from_rows(cls, token: MailAuthToken, user: MailUser) -> "Identity":
        return cls(
            token=token.token,
            user_id=user.id,
            username=user.username,
            is_superuser=bool(user.superuser),
        )
