# app/schemas/member_domain.py
from typing import List, Optional

from pydantic import BaseModel


class MemberDomainIn(BaseModel):
    domain: str
    tenant: Optional[str] = None


class MemberDomainList(BaseModel):
    domains: List[str]
