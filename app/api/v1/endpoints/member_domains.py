# app/api/v1/endpoints/member_domains.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.api import deps
from app.crud import crud_member_domain
from app.db.sheets import SheetsClient, get_sheets
from app.schemas.member_domain import MemberDomainIn, MemberDomainList
from app.schemas.token import AdminTokenPayload
from app.utils.member_domains import normalize_domain

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/member-domains", tags=["Member Domains"])


def _require_domain(value: Optional[str]) -> str:
    domain = normalize_domain(value or "")
    if not domain:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="A domain is required"
        )
    return domain


@router.get("", response_model=MemberDomainList)
def list_member_domains(
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    return MemberDomainList(
        domains=crud_member_domain.member_domain.get_multi(sheets, master_id=master_id)
    )


@router.post("", response_model=MemberDomainList)
def add_member_domain(
    domain_in: MemberDomainIn,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    domain = _require_domain(domain_in.domain)
    domains = crud_member_domain.member_domain.add(sheets, master_id=master_id, domain=domain)
    logger.info(f"Member domain {domain} added")
    return MemberDomainList(domains=domains)


@router.delete("", response_model=MemberDomainList)
def remove_member_domain(
    domain: Optional[str] = Query(None),
    domain_in: Optional[MemberDomainIn] = Body(None),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """Remove a domain given as ?domain= or in the body."""
    domain = _require_domain(domain or (domain_in.domain if domain_in else None))
    domains = crud_member_domain.member_domain.remove(sheets, master_id=master_id, domain=domain)
    logger.info(f"Member domain {domain} removed")
    return MemberDomainList(domains=domains)
