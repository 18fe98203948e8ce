"""Audio post and soundwave models."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Union

from pydantic import Field, field_validator

from clyp.exceptions import DecodingError, ValidationError
from clyp.models.base import WireModel

SOUNDWAVE_LENGTH = 400

# .NET emits up to seven fractional digits; datetime accepts at most six.
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_date(value: str) -> datetime:
    """Parse a ``DateCreated`` string such as ``2016-04-20T19:45:21.453Z``.

    Raises:
        ValueError: If the string is not an ISO 8601 date/time.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


class PostStatus(str, Enum):
    """Visibility state of an audio post, as named on the wire."""

    PUBLIC = "Public"
    PRIVATE = "Private"
    DELETED = "Deleted"
    DOWNLOAD_DISABLED = "DownloadDisabled"
    PRIVATE_DOWNLOAD_DISABLED = "PrivateDownloadDisabled"


class Soundwave:
    """The 400 points used to draw an audio waveform.

    ``Soundwave()`` gives a zeroed buffer for local drawing tools; points can
    be overwritten in place but the buffer cannot grow or shrink.
    ``Soundwave(points)`` validates the point count and stores the points
    immutably.  Responses go through :meth:`from_response`, which trusts the
    service to send the right number of points.
    """

    __slots__ = ("_datapoints",)

    def __init__(self, points: Optional[Iterable[int]] = None) -> None:
        if points is None:
            # A memoryview pins the bytearray to its size.
            self._datapoints: Union[bytes, memoryview] = memoryview(bytearray(SOUNDWAVE_LENGTH))
            return
        points = list(points)
        if len(points) != SOUNDWAVE_LENGTH:
            raise ValidationError(f"Datapoints must total {SOUNDWAVE_LENGTH}, got {len(points)}.")
        try:
            self._datapoints = bytes(points)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Datapoints must be integers between 0 and 255: {e}") from e

    @classmethod
    def from_response(cls, data: Any) -> "Soundwave":
        """Wrap the point array returned by the soundwave endpoint."""
        if not isinstance(data, list):
            raise DecodingError(f"Expected a JSON array of soundwave points, got {type(data).__name__}.")
        try:
            points = bytes(data)
        except (TypeError, ValueError) as e:
            raise DecodingError(f"Soundwave points must be integers between 0 and 255: {e}") from e
        soundwave = cls.__new__(cls)
        soundwave._datapoints = points
        return soundwave

    @property
    def datapoints(self) -> Union[bytes, memoryview]:
        return self._datapoints

    def __len__(self) -> int:
        return len(self.datapoints)

    def __iter__(self) -> Iterator[int]:
        return iter(self.datapoints)

    def __getitem__(self, index):
        return self.datapoints[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(self._datapoints, bytes):
            raise TypeError("Soundwave points are read-only once validated.")
        self._datapoints[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Soundwave):
            return NotImplemented
        return bytes(self.datapoints) == bytes(other.datapoints)

    def __repr__(self) -> str:
        return f"Soundwave(points={len(self.datapoints)}, peak={max(self.datapoints, default=0)})"


class AudioPost(WireModel):
    """
    A single hosted audio item.

    Server-assigned fields (id, status, duration, urls, playlist fields and
    creation date) are frozen. Comment settings, category, title and
    description may be edited locally; the waveform is attached by the client
    when requested.
    """

    status: PostStatus = Field(alias="Status", frozen=True)
    success: bool = Field(default=False, alias="Successful", frozen=True)
    playlist_id: Optional[str] = Field(default=None, alias="PlaylistId", frozen=True)
    playlist_upload_token: Optional[str] = Field(default=None, alias="PlaylistUploadToken", frozen=True)
    allows_comments: bool = Field(default=False, alias="CommentsEnabled")
    category: Optional[str] = Field(default=None, alias="Category")
    id: str = Field(alias="AudioFileId", frozen=True)
    title: Optional[str] = Field(default=None, alias="Title")
    description: Optional[str] = Field(default=None, alias="Description")
    duration_seconds: float = Field(alias="Duration", frozen=True)
    url: str = Field(alias="Url", frozen=True)
    url_mp3: str = Field(alias="SecureMp3Url", frozen=True)
    url_ogg: str = Field(alias="SecureOggUrl", frozen=True)
    date_string: Optional[str] = Field(default=None, alias="DateCreated", frozen=True)
    waveform: Optional[Soundwave] = Field(default=None, exclude=True)

    @field_validator("date_string")
    @classmethod
    def _check_date(cls, value: Optional[str]) -> Optional[str]:
        if value:
            # Raises ValueError, reported as a validation failure of DateCreated.
            parse_date(value)
        return value

    @property
    def duration_milliseconds(self) -> int:
        # Decimal keeps 12.345 s at 12345 ms instead of 12344.
        return int(Decimal(repr(self.duration_seconds)) * 1000)

    @property
    def date(self) -> Optional[datetime]:
        """Creation date parsed from ``DateCreated``; None when the service sent none."""
        if not self.date_string:
            return None
        return parse_date(self.date_string)

    def summary(self) -> str:
        """Human readable multi-line description of the post."""
        lines = [
            f"Title: {self.title}",
            "- - - - - - - - - - - -",
            f"ID: {self.id}",
            f"Status: {self.status.value}",
            f"Allows Comments: {self.allows_comments}",
            f"Category: {self.category}",
            f"Description: {self.description}",
            f"Duration in Seconds: {self.duration_seconds}",
            f"Urls: {self.url}, {self.url_mp3}, {self.url_ogg}",
            f"Date Created: {self.date}",
        ]
        return "\n".join(lines) + "\n"
