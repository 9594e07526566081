# app/crud/crud_member_domain.py
from typing import List

from app.db.sheets import SheetsClient
from app.models import master as master_rows
from app.models.cells import cell
from app.utils.member_domains import normalize_domain, unique_domains


class CRUDMemberDomain:
    sheet = master_rows.MEMBER_DOMAIN_SHEET_NAME

    def get_multi(self, sheets: SheetsClient, *, master_id: str) -> List[str]:
        rows = sheets.get_values(master_id, self.sheet)
        return unique_domains(cell(row, 0) for row in rows[1:])

    def _write(self, sheets: SheetsClient, master_id: str, domains: List[str]) -> None:
        rows = [master_rows.MEMBER_DOMAIN_HEADER] + [[d] for d in domains]
        sheets.set_values(master_id, self.sheet, rows)

    def add(self, sheets: SheetsClient, *, master_id: str, domain: str) -> List[str]:
        domains = self.get_multi(sheets, master_id=master_id)
        domain = normalize_domain(domain)
        if domain in domains:
            return domains
        sheets.append_row(master_id, self.sheet, [domain])
        return domains + [domain]

    def remove(self, sheets: SheetsClient, *, master_id: str, domain: str) -> List[str]:
        domains = self.get_multi(sheets, master_id=master_id)
        domain = normalize_domain(domain)
        if domain not in domains:
            return domains
        remaining = [d for d in domains if d != domain]
        self._write(sheets, master_id, remaining)
        return remaining


member_domain = CRUDMemberDomain()
