"""Configuration feed for the mail frontends.

The SMTP frontends poll this document to learn which domains they accept
mail for and how each one is filtered. It needs no token and keeps the
snake_case keys the frontends parse.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..domains.service import list_all_domains, list_allow_deny


router = APIRouter(prefix="/frontend", tags=["Frontend"])


class FrontendDomain(BaseModel):
    sender_allow_list: List[str]
    sender_deny_list: List[str]
    sender_verify_enable: bool
    greylisting_enable: bool
    viruscheck_enable: bool
    spamcheck_threshold: int


class FrontendConfig(BaseModel):
    version: str
    all_domains: List[str]
    per_domain: Dict[str, FrontendDomain]


def build_frontend_config(db: Session) -> FrontendConfig:
    domains = list_all_domains(db)
    per_domain = {}
    for domain in domains:
        allows, denys = list_allow_deny(db, domain)
        per_domain[domain.domainname] = FrontendDomain(
            sender_allow_list=allows,
            sender_deny_list=denys,
            sender_verify_enable=domain.sender_verify,
            greylisting_enable=domain.grey_listing,
            viruscheck_enable=domain.virus_check,
            spamcheck_threshold=domain.spamcheck_threshold,
        )

    return FrontendConfig(
        version=get_settings().VERSION,
        all_domains=[domain.domainname for domain in domains],
        per_domain=per_domain,
    )


@router.get("/json", response_model=FrontendConfig)
def frontend_json(db: Session = Depends(get_db)) -> FrontendConfig:
    """Domains and their sender filtering settings, for the SMTP frontends."""
    return build_frontend_config(db)
