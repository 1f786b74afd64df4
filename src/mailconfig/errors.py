"""Error kinds raised by the mailconfig services.

Every failure a service can report is one of the classes below. Each carries
a stable ``category`` (the contract callers may depend on) which the API layer
maps to an HTTP status, plus a kebab-case ``kind`` and the subject it concerns.
"""

from typing import Any, Dict


NOT_FOUND = "not-found"
FORBIDDEN = "forbidden"
BAD_REQUEST = "bad-request"
SERVER_ERROR = "server-error"

CATEGORY_STATUS = {
    NOT_FOUND: 404,
    FORBIDDEN: 403,
    BAD_REQUEST: 400,
    SERVER_ERROR: 500,
}


class MailConfigError(Exception):
    """Base class for all mailconfig failures."""

    category: str = SERVER_ERROR
    kind: str = "internal-error"
    field: str = "item"
    message: str = "{subject}"

    def __init__(self, subject: str = ""):
        self.subject = subject
        super().__init__(self.message.format(subject=subject))

    @property
    def status_code(self) -> int:
        return CATEGORY_STATUS[self.category]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error": {
                "kind": self.kind,
                "category": self.category,
                self.field: self.subject,
                "message": str(self),
            }
        }


class NotFound(MailConfigError):
    category = NOT_FOUND
    kind = "not-found"
    message = "Entry not found: {subject}"


class PermissionDenied(MailConfigError):
    category = FORBIDDEN
    kind = "permission-denied"
    field = "why"
    message = "Permission denied accessing: {subject}"


class AuthNoToken(MailConfigError):
    category = FORBIDDEN
    kind = "authentication-failure"
    field = "reason"
    message = "Authentication failed, no token provided"

    def __init__(self):
        super().__init__("")
        self.subject = str(self)


class AuthBadToken(MailConfigError):
    category = FORBIDDEN
    kind = "authentication-failure"
    field = "reason"
    message = "Authentication failed, bad token provided: {subject}"

    def __init__(self, token: str):
        super().__init__(token)
        self.token = token
        self.subject = str(self)


class TokenInUse(MailConfigError):
    category = BAD_REQUEST
    kind = "token-in-use"
    field = "token"
    message = "Authentication token is in use: {subject}"


class BadToken(MailConfigError):
    category = FORBIDDEN
    kind = "bad-token"
    field = "token"
    message = "Bad token: {subject}"


class NotLoginOrAccount(MailConfigError):
    category = BAD_REQUEST
    kind = "not-login-or-account"
    message = "Not a login or account: {subject}"


class NotAlias(MailConfigError):
    category = BAD_REQUEST
    kind = "not-alias"
    message = "Not an alias or list: {subject}"


class NotReasonBearing(MailConfigError):
    category = BAD_REQUEST
    kind = "not-bouncer-or-blackhole"
    message = "Not a bouncer or blackhole: {subject}"


class AliasComponentNotFound(MailConfigError):
    category = BAD_REQUEST
    kind = "alias-component-not-found"
    field = "component"
    message = "Alias component {subject} was not found"


class AliasWouldBecomeEmpty(MailConfigError):
    category = BAD_REQUEST
    kind = "alias-would-become-empty"
    message = "Cannot remove last component, alias {subject} would become empty"


class InvalidMember(MailConfigError):
    category = BAD_REQUEST
    kind = "invalid-member"
    field = "component"
    message = "Invalid alias component: {subject!r}"


class UserAlreadyExists(MailConfigError):
    category = BAD_REQUEST
    kind = "user-already-exists"
    message = "User already exists: {subject}"


class InvalidCredential(MailConfigError):
    category = BAD_REQUEST
    kind = "invalid-credential"
    field = "reason"
    message = "Invalid credential: {subject}"


class CredentialEncodingFailed(MailConfigError):
    category = SERVER_ERROR
    kind = "credential-encoding-failed"
    field = "reason"
    message = "Unable to encode credential: {subject}"


class StoreFailure(MailConfigError):
    category = SERVER_ERROR
    kind = "database-error"
    field = "msg"
    message = "Database failure: {subject}"
