"""Delivery of rendered invoice documents to the user."""
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from django.http import HttpResponse

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when a rendered document could not be handed to the user."""


@runtime_checkable
class ArtifactDelivery(Protocol):
    """Hands a finished document to the user under a suggested filename."""

    def deliver(self, content: bytes, filename: str, content_type: str):
        ...


class HttpDownloadDelivery:
    """Delivers a document as a browser download."""

    def deliver(self, content: bytes, filename: str, content_type: str) -> HttpResponse:
        response = HttpResponse(content, content_type=content_type)
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        response["Content-Length"] = len(content)
        return response


class DirectoryDelivery:
    """Saves documents into a directory, for hosts without a browser."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def deliver(self, content: bytes, filename: str, content_type: str) -> Path:
        # Only the final path component is honoured
        target = self.directory / Path(filename).name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            logger.error("Failed to save %s to %s: %s", filename, self.directory, e)
            raise DeliveryError(f"Could not save {filename}") from e

        logger.info("Saved %s (%s, %d bytes)", target, content_type, len(content))
        return target
