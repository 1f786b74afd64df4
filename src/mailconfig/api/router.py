"""Ping and mail client autoconfiguration.

Neither route needs a token: ping is used by clients to check they reached a
compatible server, and autoconfig is fetched by mail clients during setup.
"""

from xml.sax.saxutils import escape

from fastapi import APIRouter, Response

from ..config import get_settings
from ..schemas import KebabModel


router = APIRouter(tags=["Meta"])

AUTOCONFIG_PREFIX = "autoconfig."

AUTOCONFIG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>

<clientConfig version="1.1">
  <emailProvider id="{provider_id}">
    <domain>{domain}</domain>
    <displayName>{display_name}</displayName>
    <displayShortName>{short_name}</displayShortName>
    <incomingServer type="imap">
      <hostname>{imap_host}</hostname>
      <port>{imap_port}</port>
      <socketType>SSL</socketType>
      <authentication>password-cleartext</authentication>
      <username>%EMAILADDRESS%</username>
    </incomingServer>
    <outgoingServer type="smtp">
      <hostname>{smtp_host}</hostname>
      <port>{smtp_port}</port>
      <socketType>STARTTLS</socketType>
      <authentication>password-cleartext</authentication>
      <username>%EMAILADDRESS%</username>
    </outgoingServer>
  </emailProvider>
</clientConfig>
"""


class PingResponse(KebabModel):
    version: str


def render_autoconfig(domain: str) -> str:
    """Render the Thunderbird-style autoconfig document for ``domain``.

    Clients may ask for ``autoconfig.<domain>``; the prefix is dropped.
    """
    if domain.startswith(AUTOCONFIG_PREFIX):
        domain = domain[len(AUTOCONFIG_PREFIX):]

    settings = get_settings()
    return AUTOCONFIG_TEMPLATE.format(
        provider_id=escape(settings.AUTOCONFIG_PROVIDER_ID),
        domain=escape(domain),
        display_name=escape(settings.AUTOCONFIG_DISPLAY_NAME),
        short_name=escape(settings.AUTOCONFIG_SHORT_NAME),
        imap_host=escape(settings.IMAP_HOST),
        imap_port=settings.IMAP_PORT,
        smtp_host=escape(settings.SMTP_HOST),
        smtp_port=settings.SMTP_PORT,
    )


@router.get("/ping", response_model=PingResponse)
def ping() -> PingResponse:
    return PingResponse(version=get_settings().VERSION)


@router.get("/autoconfig/{domain}")
def autoconfig(domain: str) -> Response:
    return Response(content=render_autoconfig(domain), media_type="text/xml")
