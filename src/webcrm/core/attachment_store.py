"""Attachments of activity comments, stored in an external blob store.

Uploading an attachment directly:

1. Request an upload permission (generate_upload_permission). It grants
   permission to upload one file to the blob store and is valid for one hour.
2. POST the file to `permission.url` as multipart form data together with
   `permission.fields`.
3. Set the `comment_attachments` attribute of a new activity comment to a
   list of upload IDs, optionally followed by a file name
   ("e13f0d960feeb2b2903bd/screenshot.jpg"). The server turns upload IDs
   into permanent attachment IDs.
4. Pass an attachment ID to generate_download_url to get a signed URL valid
   for five minutes.

upload() performs steps 1 and 2 for a local file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, TYPE_CHECKING, Dict, Union

from pydantic import BaseModel, Field

from webcrm.connectors.base import NoAuth, RequestPolicy
from webcrm.connectors.http_client import HTTPClient
from webcrm.errors import ServerError

if TYPE_CHECKING:
    from webcrm.client import CrmClient

logger = logging.getLogger(__name__)


class Permission(BaseModel):
    """Everything needed to upload one attachment."""

    url: str = Field(..., description="Absolute URL to POST the file to")
    fields: Dict[str, str] = Field(default_factory=dict, description="Form fields to send along")
    upload_id: str = Field(..., description="Temporary ID for comment_attachments")


class AttachmentStore:
    """Blob store operations, bound to a client."""

    def __init__(self, client: "CrmClient"):
        self._client = client

    def generate_upload_permission(self) -> Permission:
        """Obtain a time-limited permission to upload one file."""
        api = self._client.api
        perm = api.post("attachment_store/generate_upload_permission", {})
        return Permission(
            url=api.resolve_uri(perm["url"]),
            fields=perm.get("fields") or {},
            upload_id=perm["upload_id"],
        )

    def generate_download_url(self, attachment_id: str) -> str:
        """Obtain a time-limited download URL for an attachment."""
        api = self._client.api
        response = api.post("attachment_store/generate_download_url", {"attachment_id": attachment_id})
        return api.resolve_uri(response["url"])

    def upload(self, file: Union[str, Path, IO[bytes]]) -> str:
        """Upload a local file and return "<upload_id>/<file name>".

        Args:
            file: Path of the file, or a binary file object

        Raises:
            ServerError: if the blob store rejects the upload
            NetworkError: if the blob store cannot be reached
        """
        permission = self.generate_upload_permission()

        if isinstance(file, (str, Path)):
            with open(file, "rb") as fh:
                return self._post_file(permission, fh, os.path.basename(str(file)))
        file_name = os.path.basename(getattr(file, "name", "") or "file")
        return self._post_file(permission, file, file_name)

    def _post_file(self, permission: Permission, fh: IO[bytes], file_name: str) -> str:
        shared_transport = self._client.api.http.transport
        uploader = HTTPClient(
            auth=NoAuth(),
            policy=RequestPolicy(max_network_retries=0, default_headers={}),
            transport=shared_transport,
        )
        try:
            response = uploader.request(
                "POST",
                permission.url,
                data=permission.fields,
                files={"file": (file_name, fh, "application/octet-stream")},
            )
        finally:
            # A shared transport belongs to the API client
            if shared_transport is None:
                uploader.close()

        if not response.ok:
            raise ServerError(f"File upload failed with code {response.status_code}")
        logger.info(f"Uploaded {file_name} as {permission.upload_id}")
        return f"{permission.upload_id}/{file_name}"
