"""Lifecycle of DKIM signing keys.

Keys are RSA pairs generated here and stored per domain under a selector.
Any number of a domain's keys may be signing at once, which is what a key
rotation needs: publish the new selector, turn it on, then turn the old one
off while its record stays published for mail already in flight.

Key generation is CPU bound and synchronous. The HTTP layer calls it from a
sync endpoint so it runs on FastAPI's threadpool, off the event loop.
"""

import base64
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from sqlalchemy.orm import Session

from ..config import MIN_DKIM_KEY_BITS, get_settings
from ..database import flush_or_fail
from ..errors import NotFound
from ..models.domain import MailDomain
from ..models.domain_key import MailDomainKey
from ..observability.metrics import key_generation_seconds, mutations_total

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


@dataclass
class KeyListing:
    """A domain's keys split by signing flag, selector -> DNS record."""
    active: Dict[str, str] = field(default_factory=dict)
    passive: Dict[str, str] = field(default_factory=dict)


def generate_keypair(bits: Optional[int] = None) -> Tuple[str, str]:
    """Generate an RSA key pair for DKIM signing.

    Args:
        bits: Modulus size, defaults to the DKIM_KEY_BITS setting; at least 2048

    Returns:
        Tuple of (PKCS#1 PEM private key, base64 DER SubjectPublicKeyInfo public key)

    Raises:
        ValueError: If ``bits`` is below 2048
    """
    if bits is None:
        bits = get_settings().DKIM_KEY_BITS
    if bits < MIN_DKIM_KEY_BITS:
        raise ValueError(f"DKIM keys must be at least {MIN_DKIM_KEY_BITS} bits")

    start = time.perf_counter()
    private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits)
    key_generation_seconds.labels(bits=str(bits)).observe(time.perf_counter() - start)

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")

    public_der = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

    return private_pem, base64.b64encode(public_der).decode("ascii")


def render_public_record(key: MailDomainKey) -> str:
    """Format the public half as the TXT record published at ``<selector>._domainkey``."""
    return f"v=DKIM1; k=rsa; p={key.pubkey}"


def _find(db: Session, domain: MailDomain, selector: str) -> Optional[MailDomainKey]:
    return db.query(MailDomainKey).filter(
        MailDomainKey.maildomain == domain.id,
        MailDomainKey.selector == selector,
    ).first()


def _get_or_404(db: Session, domain: MailDomain, selector: str) -> MailDomainKey:
    key = _find(db, domain, selector)
    if key is None:
        raise NotFound(selector)
    return key


def domain_keys(db: Session, domain: MailDomain) -> List[MailDomainKey]:
    return db.query(MailDomainKey).filter(
        MailDomainKey.maildomain == domain.id
    ).order_by(MailDomainKey.selector).all()


def list_keys(db: Session, domain: MailDomain) -> KeyListing:
    listing = KeyListing()
    for key in domain_keys(db, domain):
        target = listing.active if key.signing else listing.passive
        target[key.selector] = render_public_record(key)
    return listing


def create_key(
    db: Session,
    domain: MailDomain,
    selector: str,
    signing: bool = False,
    bits: Optional[int] = None,
) -> MailDomainKey:
    """Generate and store a new key under ``selector``.

    Raises:
        StoreFailure: The domain already has a key with this selector
    """
    private_pem, public_b64 = generate_keypair(bits)

    key = MailDomainKey(
        maildomain=domain.id,
        selector=selector,
        privkey=private_pem,
        pubkey=public_b64,
        signing=signing,
    )
    db.add(key)
    flush_or_fail(db)

    mutations_total.labels(resource="key", action="create").inc()
    logger.info(
        f"Created key {selector} for {domain.domainname} (signing={signing})",
        extra={"domain": domain.domainname, "selector": selector},
    )
    return key


def set_signing(db: Session, domain: MailDomain, selector: str, signing: bool) -> bool:
    """Turn signing with an existing key on or off, returning the new flag.

    Raises:
        NotFound: No key with this selector
    """
    key = _get_or_404(db, domain, selector)
    key.signing = signing
    flush_or_fail(db)

    mutations_total.labels(resource="key", action="set_signing").inc()
    logger.info(
        f"Set signing={signing} on key {selector} for {domain.domainname}",
        extra={"domain": domain.domainname, "selector": selector},
    )
    return key.signing


def delete_key(db: Session, domain: MailDomain, selector: str) -> Tuple[str, bool]:
    """Delete a key, returning its selector and whether it was signing.

    Raises:
        NotFound: No key with this selector
    """
    key = _get_or_404(db, domain, selector)
    was_signing = bool(key.signing)

    db.delete(key)
    flush_or_fail(db)

    mutations_total.labels(resource="key", action="delete").inc()
    logger.info(
        f"Deleted key {selector} for {domain.domainname} (was signing={was_signing})",
        extra={"domain": domain.domainname, "selector": selector},
    )
    return selector, was_signing
