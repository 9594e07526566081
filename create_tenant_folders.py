#!/usr/bin/env python3
"""
Tenant Drive folder bootstrap

Creates one folder per tenant under a parent Drive folder, skipping names that
already exist there, and prints the settings to add to the environment.

Usage:
    python create_tenant_folders.py [PARENT_FOLDER_ID]

The parent defaults to GOOGLE_DRIVE_FOLDER_ID.
"""
import argparse
import logging
import sys
from typing import Dict, Tuple

from app.core.config import settings
from app.core.errors import AppError
from app.core.tenants import TENANT_KEYS, env_prefix
from app.db.sheets import get_http_client
from app.services.drive import DriveClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def create_tenant_folders(
    drive: DriveClient, parent_folder_id: str
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Returns (created, existing), each mapping tenant key to folder id."""
    children = {item.get("name"): item.get("id", "") for item in drive.list_children(parent_folder_id)}
    created: Dict[str, str] = {}
    existing: Dict[str, str] = {}
    for key in TENANT_KEYS:
        if key in children:
            existing[key] = children[key]
            logger.info(f"Folder {key} already exists ({children[key]})")
            continue
        created[key] = drive.create_folder(parent_folder_id, key)
        logger.info(f"Created folder {key} ({created[key]})")
    return created, existing


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create per-tenant Drive folders")
    parser.add_argument("parent_folder_id", nargs="?", default="")
    args = parser.parse_args(argv)

    parent_folder_id = args.parent_folder_id.strip() or settings.GOOGLE_DRIVE_FOLDER_ID
    if not parent_folder_id:
        logger.error("Pass a parent folder id or set GOOGLE_DRIVE_FOLDER_ID")
        return 1

    http = get_http_client()
    try:
        created, existing = create_tenant_folders(DriveClient(http), parent_folder_id)
    except AppError as e:
        logger.error(f"Folder creation failed: {e.message}")
        return 1
    finally:
        http.close()

    for key, folder_id in created.items():
        print(f"{env_prefix(key)}_DRIVE_FOLDER_ID={folder_id}")
    if existing:
        logger.info(f"Skipped existing folders: {', '.join(existing)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
