# app/services/drive.py
"""Google Drive v3 client: folder placement and seminar image hosting."""

import json
import logging
import uuid
from typing import Generator, List, Tuple

from app.core.errors import DriveError
from app.db.sheets import get_http_client
from app.services.google_api import GoogleApiClient

logger = logging.getLogger(__name__)

DRIVE_API = "https://www.googleapis.com/drive/v3/files"
DRIVE_UPLOAD_API = "https://www.googleapis.com/upload/drive/v3/files"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def image_view_url(file_id: str) -> str:
    return f"https://drive.google.com/file/d/{file_id}/view"


def _multipart_related(metadata: dict, content: bytes, mime_type: str) -> Tuple[str, bytes]:
    """Drive's multipart upload takes multipart/related, not form-data."""
    boundary = uuid.uuid4().hex
    body = b"".join(
        [
            f"--{boundary}\r\n".encode(),
            b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
            json.dumps(metadata).encode("utf-8"),
            f"\r\n--{boundary}\r\n".encode(),
            f"Content-Type: {mime_type}\r\n\r\n".encode(),
            content,
            f"\r\n--{boundary}--\r\n".encode(),
        ]
    )
    return boundary, body


class DriveClient(GoogleApiClient):
    error_class = DriveError
    service_name = "Drive"

    def move_to_folder(self, file_id: str, folder_id: str) -> None:
        """Re-parent a file (a freshly created spreadsheet) into folder_id."""
        data = self._request(
            "GET",
            f"{DRIVE_API}/{file_id}",
            "read file parents",
            params={"fields": "parents", "supportsAllDrives": "true"},
        )
        previous_parents = ",".join(data.get("parents", []))
        self._request(
            "PATCH",
            f"{DRIVE_API}/{file_id}",
            "move file",
            params={
                "addParents": folder_id,
                "removeParents": previous_parents,
                "supportsAllDrives": "true",
            },
        )

    def list_children(self, folder_id: str) -> List[dict]:
        """Non-trashed items directly under folder_id, as {"id", "name"} dicts."""
        data = self._request(
            "GET",
            DRIVE_API,
            "list folder",
            params={
                "q": f"'{folder_id}' in parents and trashed = false",
                "fields": "files(id, name)",
                "supportsAllDrives": "true",
                "includeItemsFromAllDrives": "true",
            },
        )
        return data.get("files", [])

    def create_folder(self, parent_folder_id: str, name: str) -> str:
        data = self._request(
            "POST",
            DRIVE_API,
            "create folder",
            params={"supportsAllDrives": "true"},
            json={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_folder_id]},
        )
        return data["id"]

    def upload_image(
        self, file_name: str, content: bytes, mime_type: str, folder_id: str = ""
    ) -> str:
        """Upload an image, make it readable by anyone with the link, return its view URL."""
        metadata = {"name": file_name}
        if folder_id:
            metadata["parents"] = [folder_id]
        boundary, body = _multipart_related(metadata, content, mime_type)
        data = self._request(
            "POST",
            DRIVE_UPLOAD_API,
            "upload image",
            params={"uploadType": "multipart", "supportsAllDrives": "true"},
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            content=body,
        )
        file_id = data["id"]
        self._request(
            "POST",
            f"{DRIVE_API}/{file_id}/permissions",
            "share image",
            params={"supportsAllDrives": "true"},
            json={"role": "reader", "type": "anyone"},
        )
        logger.info(f"Uploaded image {file_name} as {file_id}")
        return image_view_url(file_id)


def get_drive() -> Generator:
    """Dependency to get a Drive client."""
    http = get_http_client()
    try:
        yield DriveClient(http)
    finally:
        http.close()
