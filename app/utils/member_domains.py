# app/utils/member_domains.py
"""
Member-company email domains.

A registered domain admits its own address space and every subdomain of it:
with "example.com" registered, "user@mail.example.com" is a member address,
while "example.com" itself is not admitted by a registered "mail.example.com".
"""

from typing import Iterable, List


def domain_from_email(email: str) -> str:
    """Lower-cased part after the first "@", or "" when there is none."""
    at = (email or "").find("@")
    if at == -1:
        return ""
    return email[at + 1:].strip().lower()


def normalize_domain(domain: str) -> str:
    return (domain or "").strip().lstrip("@").strip().lower()


def domain_matches(email_domain: str, allowed: str) -> bool:
    if not email_domain or not allowed:
        return False
    if email_domain == allowed:
        return True
    if len(allowed) >= len(email_domain):
        return False
    return email_domain.endswith("." + allowed)


def is_member_email(email: str, domains: Iterable[str]) -> bool:
    email_domain = domain_from_email(email)
    if not email_domain:
        return False
    return any(domain_matches(email_domain, normalize_domain(d)) for d in domains)


def unique_domains(values: Iterable[str]) -> List[str]:
    """Normalized, de-duplicated, order-preserving."""
    seen = []
    for value in values:
        domain = normalize_domain(value)
        if domain and domain not in seen:
            seen.append(domain)
    return seen
