"""
Bunny CDN storage client used to publish admin review videos
"""
import logging
from urllib.parse import urlparse

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class BunnyCDNError(Exception):
    """Raised when a file cannot be stored on or removed from Bunny CDN."""


class BunnyCDNService:
    """
    Thin client for the Bunny CDN storage API.

    Files are written with an HTTP PUT to
    https://<storage_host>/<storage_zone>/<file_name> and served back from
    https://<storage_zone>.b-cdn.net/<file_name>.
    """

    def __init__(self, api_key=None, storage_zone=None, storage_host=None, timeout=None, session=None):
        self.api_key = api_key if api_key is not None else settings.BUNNY_CDN_API_KEY
        self.storage_zone = storage_zone if storage_zone is not None else settings.BUNNY_CDN_STORAGE_ZONE
        self.storage_host = storage_host or settings.BUNNY_CDN_STORAGE_HOST
        self.timeout = timeout or settings.BUNNY_CDN_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def is_available(self):
        """Check if the CDN credentials are configured"""
        return bool(self.api_key and self.storage_zone)

    def storage_url(self, file_name):
        return f"https://{self.storage_host}/{self.storage_zone}/{file_name}"

    def public_url(self, file_name):
        return f"https://{self.storage_zone}.b-cdn.net/{file_name}"

    def upload(self, content, file_name):
        """
        Store a file and return its public URL.

        Args:
            content: File body as bytes or a readable binary file object
            file_name: Path of the file inside the storage zone

        Returns:
            str: Public CDN URL of the stored file

        Raises:
            BunnyCDNError: If credentials are missing or the upload fails
        """
        if not self.is_available():
            raise BunnyCDNError("Bunny CDN API key or storage zone is not set")

        try:
            response = self.session.put(
                self.storage_url(file_name),
                data=content,
                headers={
                    'AccessKey': self.api_key,
                    'Content-Type': 'application/octet-stream',
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error uploading {file_name} to Bunny CDN: {e}")
            raise BunnyCDNError(f"Failed to upload file to Bunny CDN: {e}") from e

        if response.status_code != 201:
            logger.error(
                f"Bunny CDN rejected upload of {file_name}: "
                f"{response.status_code} {response.text[:200]}"
            )
            raise BunnyCDNError(
                f"Failed to upload file to Bunny CDN. Status: {response.status_code}"
            )

        logger.info(f"Uploaded {file_name} to Bunny CDN")
        return self.public_url(file_name)

    def delete(self, file_name):
        """
        Remove a file from the storage zone. A file that is already gone
        counts as deleted.

        Raises:
            BunnyCDNError: If credentials are missing or the delete fails
        """
        if not self.is_available():
            raise BunnyCDNError("Bunny CDN API key or storage zone is not set")

        try:
            response = self.session.delete(
                self.storage_url(file_name),
                headers={'AccessKey': self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BunnyCDNError(f"Failed to delete file from Bunny CDN: {e}") from e

        if response.status_code not in (200, 404):
            raise BunnyCDNError(
                f"Failed to delete file from Bunny CDN. Status: {response.status_code}"
            )

        logger.info(f"Deleted {file_name} from Bunny CDN")

    def file_name_from_url(self, url):
        """
        Return the storage path of a public URL served by this zone, or None
        for URLs hosted anywhere else.
        """
        if not url or not self.storage_zone:
            return None
        parsed = urlparse(url)
        if parsed.netloc != f"{self.storage_zone}.b-cdn.net":
            return None
        return parsed.path.lstrip('/') or None


def review_video_file_name(submission_id, timestamp_ms):
    """Storage name of an admin review video for one submission"""
    return f"review_{submission_id}_{timestamp_ms}.mp4"
