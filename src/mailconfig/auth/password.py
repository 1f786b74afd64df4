"""Mail credential encoding using Argon2id

Secrets for login and account entries are stored as ``{ARGON2ID}`` followed
by the Argon2 PHC string, the scheme-tagged format the mail server's password
database understands. Values that already carry the tag are passed through
so an exported hash can be re-imported without being hashed twice.

Unlike the application's own secrets no pepper is mixed in: the mail server
must be able to verify these hashes on its own.
"""

import logging

from argon2 import PasswordHasher, Type, extract_parameters
from argon2.exceptions import HashingError, InvalidHashError

from ..errors import CredentialEncodingFailed, InvalidCredential

logger = logging.getLogger(__name__)

SCHEME_TAG = "{ARGON2ID}"

# OWASP recommended parameters for Argon2id
# Memory cost: 64 MB, Time cost: 3, Parallelism: 4
_hasher = PasswordHasher(
    memory_cost=65536,  # 64 MB
    time_cost=3,
    parallelism=4,
    hash_len=32,
    salt_len=16,
    type=Type.ID,
)


# Weakest parameters accepted on an imported hash
MIN_MEMORY_COST = 8192
MIN_TIME_COST = 1


def is_encoded(value: str) -> bool:
    """Check whether a stored value is already a usable tagged Argon2id hash.

    The PHC string must carry a salt and a hash and meet the minimum costs;
    a structurally valid but empty hash could never verify.
    """
    if not value or not value.startswith(SCHEME_TAG):
        return False
    try:
        params = extract_parameters(value[len(SCHEME_TAG):])
    except InvalidHashError:
        return False
    return (
        params.type is Type.ID
        and params.salt_len > 0
        and params.hash_len > 0
        and params.memory_cost >= MIN_MEMORY_COST
        and params.time_cost >= MIN_TIME_COST
    )


def encode_password(secret: str) -> str:
    """Encode a login secret for storage.

    Args:
        secret: Plain text secret, or an already tagged ``{ARGON2ID}$argon2id$...`` value

    Returns:
        str: ``{ARGON2ID}$argon2id$v=19$m=65536,t=3,p=4$...$...``

    Raises:
        InvalidCredential: If the secret is empty, or is tagged but the hash is malformed
        CredentialEncodingFailed: If Argon2 fails to hash the secret
    """
    if not secret:
        raise InvalidCredential("secret cannot be empty")

    if secret.startswith(SCHEME_TAG):
        if not is_encoded(secret):
            raise InvalidCredential(f"value tagged {SCHEME_TAG} is not a valid Argon2 hash")
        return secret

    try:
        phc = _hasher.hash(secret)
    except HashingError as e:
        logger.error(f"Argon2 hashing failed: {e}")
        raise CredentialEncodingFailed(str(e)) from e

    return f"{SCHEME_TAG}{phc}"
