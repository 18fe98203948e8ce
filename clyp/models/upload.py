"""Builders describing a new audio post before it is uploaded.

All rules are enforced when the request is built and again whenever one of
its fields is changed, so a request handed to
:meth:`clyp.services.client.ClypClient.upload_post` is always valid.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

import httpx

from clyp.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 420
LONGITUDE_RANGE = (-15069.0, 15069.0)
LATITUDE_RANGE = (-90.0, 90.0)


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def _check_playlist_pair(playlist_id: Optional[str], playlist_upload_token: Optional[str]) -> None:
    if _present(playlist_id) and not _present(playlist_upload_token):
        raise ValidationError("A playlist upload token must be provided when specifying a playlist ID.")
    if _present(playlist_upload_token) and not _present(playlist_id):
        raise ValidationError("A playlist ID must be provided when specifying a playlist upload token.")


def _check_location_pair(longitude: Optional[float], latitude: Optional[float]) -> None:
    if (longitude is None) != (latitude is None):
        raise ValidationError("Latitude and Longitude must both be present, or both null.")


def _check_longitude(longitude: Optional[float]) -> None:
    low, high = LONGITUDE_RANGE
    if longitude is not None and not low <= longitude <= high:
        raise ValidationError(f"Longitude must be between {low:g} and {high:g}, got {longitude}.")


def _check_latitude(latitude: Optional[float]) -> None:
    low, high = LATITUDE_RANGE
    if latitude is not None and not low <= latitude <= high:
        raise ValidationError(f"Latitude must be between {low:g} and {high:g}, got {latitude}.")


def _truncate_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    if len(description) > MAX_DESCRIPTION_LENGTH:
        # The service caps descriptions at 420 characters; longer text is cut, not rejected.
        logger.debug(f"Truncating description from {len(description)} to {MAX_DESCRIPTION_LENGTH} characters.")
        return description[:MAX_DESCRIPTION_LENGTH]
    return description


class UploadRequest:
    """
    A validated description of an audio file to upload.

    Args:
        file_path: Path to the audio file. Required.
        playlist_id: Playlist to add the post to. Must be given together with
            ``playlist_upload_token``.
        playlist_upload_token: Upload (access) token of that playlist. Must be
            given together with ``playlist_id``.
        order: Position of the post in the playlist. Ignored when no playlist
            is given.
        description: Up to 420 characters; longer text is truncated. An empty
            description is kept as given and not sent to the service.
        longitude: Between -15069 and 15069. Must be given together with
            ``latitude``.
        latitude: Between -90 and 90. Must be given together with ``longitude``.

    Raises:
        ValidationError: For the first rule broken, checked in the order
            file path, playlist pair, location pair, longitude range,
            latitude range.
    """

    def __init__(
        self,
        file_path: str,
        playlist_id: Optional[str] = None,
        playlist_upload_token: Optional[str] = None,
        order: Optional[int] = None,
        description: Optional[str] = None,
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
    ) -> None:
        if not file_path:
            raise ValidationError("Must specify file path.")
        _check_playlist_pair(playlist_id, playlist_upload_token)
        _check_location_pair(longitude, latitude)
        _check_longitude(longitude)
        _check_latitude(latitude)

        self._file_path = str(file_path)
        self._playlist_id = playlist_id or None
        self._playlist_upload_token = playlist_upload_token or None
        self._order = order
        self._description = _truncate_description(description)
        self._longitude = longitude
        self._latitude = latitude

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def playlist_id(self) -> Optional[str]:
        return self._playlist_id

    @property
    def playlist_upload_token(self) -> Optional[str]:
        return self._playlist_upload_token

    @property
    def order(self) -> Optional[int]:
        return self._order

    @order.setter
    def order(self, value: Optional[int]) -> None:
        self._order = value

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = _truncate_description(value)

    @property
    def longitude(self) -> Optional[float]:
        return self._longitude

    @longitude.setter
    def longitude(self, value: Optional[float]) -> None:
        _check_location_pair(value, self._latitude)
        _check_longitude(value)
        self._longitude = value

    @property
    def latitude(self) -> Optional[float]:
        return self._latitude

    @latitude.setter
    def latitude(self, value: Optional[float]) -> None:
        _check_location_pair(self._longitude, value)
        _check_latitude(value)
        self._latitude = value

    @property
    def has_playlist(self) -> bool:
        return _present(self._playlist_id) and _present(self._playlist_upload_token)

    @property
    def has_location(self) -> bool:
        return self._longitude is not None and self._latitude is not None

    def set_playlist(self, playlist_id: str, playlist_upload_token: str, order: Optional[int] = None) -> None:
        """Attach the request to a playlist; both values are required."""
        if not _present(playlist_id) and not _present(playlist_upload_token):
            raise ValidationError("A playlist ID and playlist upload token are required.")
        _check_playlist_pair(playlist_id, playlist_upload_token)
        self._playlist_id = playlist_id
        self._playlist_upload_token = playlist_upload_token
        if order is not None:
            self._order = order

    def clear_playlist(self) -> None:
        self._playlist_id = None
        self._playlist_upload_token = None

    def set_location(self, longitude: float, latitude: float) -> None:
        """Replace both coordinates at once, checking pairing and ranges."""
        _check_location_pair(longitude, latitude)
        _check_longitude(longitude)
        _check_latitude(latitude)
        self._longitude = longitude
        self._latitude = latitude

    def clear_location(self) -> None:
        self._longitude = None
        self._latitude = None

    def query_params(self) -> Dict[str, Union[str, int, float]]:
        """Query parameters for the upload endpoint.

        Each optional group is added only when complete: the playlist id and
        token together (with ``order`` only alongside them), and the
        coordinates together.
        """
        params: Dict[str, Union[str, int, float]] = {}
        if self._description:
            params["description"] = self._description
        if self.has_playlist:
            params["playlistId"] = self._playlist_id
            params["playlistUploadToken"] = self._playlist_upload_token
            if self._order is not None:
                params["order"] = self._order
        if self.has_location:
            params["longitude"] = self._longitude
            params["latitude"] = self._latitude
        return params

    def __repr__(self) -> str:
        return (
            f"UploadRequest(file_path={self._file_path!r}, playlist_id={self._playlist_id!r}, "
            f"order={self._order!r}, longitude={self._longitude!r}, latitude={self._latitude!r})"
        )


def build(file_path: str, **options) -> UploadRequest:
    """Validate and return an :class:`UploadRequest`.

    ``options`` are the optional keyword arguments of :class:`UploadRequest`.
    """
    return UploadRequest(file_path, **options)


class UploadUrlRequest:
    """An audio file to import from a remote URL, optionally into a playlist.

    The service endpoint behind this request no longer works; see
    :meth:`clyp.services.client.ClypClient.upload_post_from_url`.
    """

    def __init__(
        self,
        url: Union[str, httpx.URL],
        playlist_id: Optional[str] = None,
        playlist_upload_token: Optional[str] = None,
    ) -> None:
        if url is None or str(url) == "":
            raise ValidationError("Must provide upload URL.")
        _check_playlist_pair(playlist_id, playlist_upload_token)
        self.url = httpx.URL(str(url))
        self.playlist_id = playlist_id or None
        self.playlist_upload_token = playlist_upload_token or None
