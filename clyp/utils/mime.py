"""Content-type lookup for files sent to the upload endpoint."""

import mimetypes
from pathlib import Path
from typing import Callable, Union

MimeLookup = Callable[[str], str]

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Formats the service accepts that older platform tables may not list.
_AUDIO_TYPES = {
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".wav": "audio/wav",
    ".aiff": "audio/aiff",
    ".3gp": "audio/3gpp",
}


def guess_content_type(path: Union[str, Path]) -> str:
    """Return the MIME type for ``path`` based on its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in _AUDIO_TYPES:
        return _AUDIO_TYPES[suffix]
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or DEFAULT_CONTENT_TYPE
