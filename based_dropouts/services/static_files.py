"""Static file server for the site.

Maps request paths to files under a root directory and guesses the content
type from the file extension.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from based_dropouts.logging_config import get_logger

logger = get_logger(__name__)

MIME_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "application/octet-stream"

NOT_FOUND_BODY = b"File not found"
SERVER_ERROR_BODY = b"Internal server error"


def guess_mime_type(path: Union[str, Path]) -> str:
    """Content type for a file path by its extension."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


@dataclass
class StaticFileResponse:
    """Status, content type and body for a static file request."""

    status_code: int
    body: bytes
    content_type: str = "text/plain"


class StaticFileServer:
    """Serves files under a root directory."""

    def __init__(self, root: Union[str, Path], index_document: str = "index.html"):
        """
        Args:
            root: Directory files are served from
            index_document: File served for the root path
        """
        self.root = Path(root).resolve()
        self.index_document = index_document

    def resolve(self, request_path: str) -> Path:
        """File path for a request path. The root path maps to the index document."""
        relative = request_path.lstrip("/")
        if not relative:
            relative = self.index_document
        return self.root / relative

    def read(self, request_path: str) -> StaticFileResponse:
        """Read the file for a request path.

        Returns:
            200 with the file contents, 404 if there is no such file under the
            root or the path is not a valid file name, 500 on any other read
            error
        """
        file_path = self.resolve(request_path)

        try:
            if not file_path.resolve().is_relative_to(self.root):
                logger.warning(f"Refusing path outside the site root: {request_path}")
                return StaticFileResponse(status_code=404, body=NOT_FOUND_BODY)

            data = file_path.read_bytes()
        except FileNotFoundError:
            return StaticFileResponse(status_code=404, body=NOT_FOUND_BODY)
        except ValueError as e:
            # e.g. an embedded null byte
            logger.warning(f"Refusing invalid path {request_path!r}: {str(e)}")
            return StaticFileResponse(status_code=404, body=NOT_FOUND_BODY)
        except OSError as e:
            logger.error(f"Error reading {file_path}: {str(e)}")
            return StaticFileResponse(status_code=500, body=SERVER_ERROR_BODY)

        return StaticFileResponse(
            status_code=200,
            body=data,
            content_type=guess_mime_type(file_path),
        )
