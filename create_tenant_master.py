#!/usr/bin/env python3
"""
Tenant master bootstrap

Creates the master spreadsheet of a tenant (seminar list, member domains and
reservation number index, each with its header row), optionally moves it into
the tenant's Drive folder, and prints the setting to add to the environment.

Usage:
    python create_tenant_master.py whgc-seminars [--folder-id FOLDER_ID]
"""
import argparse
import logging
import sys

from app.core.errors import AppError
from app.core.tenants import TENANT_KEYS, TENANT_LABELS, env_prefix
from app.db.sheets import SheetsClient, get_http_client
from app.models import master as master_rows
from app.models import seminar as seminar_rows
from app.services.drive import DriveClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def master_layout() -> dict:
    return {
        seminar_rows.SHEET_NAME: seminar_rows.HEADER,
        master_rows.MEMBER_DOMAIN_SHEET_NAME: master_rows.MEMBER_DOMAIN_HEADER,
        master_rows.RESERVATION_INDEX_SHEET_NAME: master_rows.RESERVATION_INDEX_HEADER,
    }


def create_master(sheets: SheetsClient, drive: DriveClient, tenant: str, folder_id: str = "") -> str:
    layout = master_layout()
    title = f"【マスター】{TENANT_LABELS.get(tenant, tenant)}"
    spreadsheet_id = sheets.create_spreadsheet(title, list(layout), layout)
    logger.info(f"Created master spreadsheet {spreadsheet_id} for {tenant}")

    if folder_id:
        try:
            drive.move_to_folder(spreadsheet_id, folder_id)
            logger.info(f"Moved master spreadsheet into folder {folder_id}")
        except AppError as e:
            logger.warning(f"Could not move the spreadsheet into {folder_id}: {e.message}")
    return spreadsheet_id


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a tenant master spreadsheet")
    parser.add_argument("tenant", choices=TENANT_KEYS)
    parser.add_argument("--folder-id", default="", help="Drive folder to place the spreadsheet in")
    args = parser.parse_args(argv)

    http = get_http_client()
    try:
        spreadsheet_id = create_master(
            SheetsClient(http), DriveClient(http), args.tenant, args.folder_id
        )
    except AppError as e:
        logger.error(f"Master creation failed: {e.message}")
        return 1
    finally:
        http.close()

    print(f"{env_prefix(args.tenant)}_MASTER_SPREADSHEET_ID={spreadsheet_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
