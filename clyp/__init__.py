"""Asynchronous client for the Clyp audio hosting API."""

from clyp.exceptions import (
    ClypError,
    DecodingError,
    InvalidArgument,
    TransportError,
    UnsupportedOperation,
    ValidationError,
)
from clyp.models import (
    AudioPost,
    Category,
    Eligibility,
    Playlist,
    PostStatus,
    Soundwave,
    UploadRequest,
    UploadUrlRequest,
    build,
)
from clyp.services.client import ClypClient, ListKind

__version__ = "0.1.0"

__all__ = [
    "AudioPost",
    "Category",
    "ClypClient",
    "ClypError",
    "DecodingError",
    "Eligibility",
    "InvalidArgument",
    "ListKind",
    "Playlist",
    "PostStatus",
    "Soundwave",
    "TransportError",
    "UnsupportedOperation",
    "UploadRequest",
    "UploadUrlRequest",
    "ValidationError",
    "build",
]
