"""Asynchronous wrapper around the Clyp HTTP API."""

from __future__ import annotations

import asyncio
import logging
import os
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from clyp.config import settings
from clyp.exceptions import DecodingError, InvalidArgument, TransportError, UnsupportedOperation
from clyp.models.audio_post import AudioPost, Soundwave
from clyp.models.category import Category
from clyp.models.playlist import Playlist
from clyp.models.upload import UploadRequest, UploadUrlRequest
from clyp.utils.mime import MimeLookup, guess_content_type

# Get a logger for this module
logger = logging.getLogger(__name__)

AUDIO_FILE_FIELD = "audioFile"


class ListKind(Enum):
    """Curated listings published by the service."""

    FEATURED = "Featured"
    POPULAR = "Popular"
    RANDOM = "Random"
    RECENT = "Recent"


# Paths relative to the API base URL, one per listing.
LIST_ENDPOINTS: Dict[ListKind, str] = {
    ListKind.FEATURED: "FeaturedList/Featured",
    ListKind.POPULAR: "FeaturedList/Popular",
    ListKind.RANDOM: "FeaturedList/Random",
    ListKind.RECENT: "FeaturedList/Recent",
}


class ClypClient:
    """
    Client for the Clyp API.

    Every operation is a single request/response round trip: no caching,
    no retries.  The client keeps no state between calls apart from the
    optional HTTP client it was given, so one instance can be shared by
    concurrent tasks.

    Args:
        http_client: Transport to send requests through. The caller owns its
            lifetime. When omitted, each call opens its own short-lived
            ``httpx.AsyncClient`` unless the client is used as an async
            context manager.
        base_url: API host for read operations.
        upload_url: Host of the upload endpoint.
        mime_lookup: Callable returning the content type for a file path.
        timeout: Timeout in seconds for clients created here.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        base_url: Optional[str] = None,
        upload_url: Optional[str] = None,
        mime_lookup: MimeLookup = guess_content_type,
        timeout: Optional[float] = None,
    ) -> None:
        self._http_client = http_client
        self._owns_http_client = False
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.upload_url = (upload_url or settings.UPLOAD_URL).rstrip("/")
        self.mime_lookup = mime_lookup
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    async def __aenter__(self) -> "ClypClient":
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http_client = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    # ------------------------------------------------------------------
    # Transport helpers
    # ------------------------------------------------------------------

    def _api(self, *segments: str) -> str:
        return "/".join([self.base_url, *(quote(s, safe="") for s in segments)])

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            return await self._send(self._http_client, method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._send(client, method, url, **kwargs)

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            logger.info(f"Sending {method} request to Clyp: {url}")
            response = await client.request(method, url, **kwargs)
            response.raise_for_status() # Raises HTTPStatusError for 4xx/5xx responses
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error {e.response.status_code} from Clyp for {method} {e.request.url}: {e.response.text}")
            raise TransportError(
                f"HTTP error from Clyp: {e.response.status_code}",
                status_code=e.response.status_code,
                url=str(e.request.url),
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error for Clyp (URL: {e.request.url}): {e}", exc_info=True)
            raise TransportError(f"Request to Clyp failed: {e}", url=str(e.request.url)) from e

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        if not response.content or not response.content.strip():
            logger.error(f"Empty response body from {response.request.url}")
            raise DecodingError(f"Empty response body from {response.request.url}.")
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {response.request.url} is not valid JSON: {e}")
            raise DecodingError(f"Response from {response.request.url} is not valid JSON.") from e

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._request("GET", url, params=params)
        return self._decode_json(response)

    # ------------------------------------------------------------------
    # Audio posts
    # ------------------------------------------------------------------

    async def get_post(self, id: str, include_waveform: bool = False) -> AudioPost:
        """
        Get a single audio post by id.

        Args:
            id: Id of the audio post.
            include_waveform: When True the soundwave is fetched as well and
                attached as ``post.waveform``.

        Raises:
            InvalidArgument: If ``id`` is empty.
            TransportError: If the request fails.
            DecodingError: If the response is not an audio post.
        """
        if not id:
            raise InvalidArgument("Must specify an ID when getting an Audio Post.")

        if include_waveform:
            data, soundwave = await asyncio.gather(self._get_json(self._api(id)), self.get_soundwave(id))
            post = AudioPost.from_response(data)
            post.waveform = soundwave
        else:
            post = AudioPost.from_response(await self._get_json(self._api(id)))

        logger.debug(f"Fetched audio post {post.id} (status {post.status.value}).")
        return post

    async def get_soundwave(self, id: str) -> Soundwave:
        """Get the 400 points (0 - 100) that outline the post's waveform."""
        if not id:
            raise InvalidArgument("Must specify an ID when getting an Audio Post soundwave.")
        return Soundwave.from_response(await self._get_json(self._api(id, "soundwave")))

    async def upload_post(self, request: UploadRequest) -> AudioPost:
        """
        Upload a file anonymously.

        The file is streamed from disk with ordinary blocking reads while the
        request body is sent, which briefly holds the event loop for each
        chunk; very large files delay other tasks on the same loop.

        Args:
            request: A request built with :func:`clyp.models.upload.build`.

        Returns:
            The newly created audio post.

        Raises:
            InvalidArgument: If ``request`` is not an UploadRequest.
            FileNotFoundError: If the file does not exist. Raised before any request is sent.
            TransportError: If the upload fails.
            DecodingError: If the response is empty or not an audio post.
        """
        if not isinstance(request, UploadRequest):
            raise InvalidArgument(f"Expected an UploadRequest, got {type(request).__name__}.")

        url = f"{self.upload_url}/upload"
        params = request.query_params()
        content_type = self.mime_lookup(request.file_path)
        filename = os.path.basename(request.file_path)
        logger.info(f"Uploading {request.file_path} ({content_type}) with query parameters {sorted(params)}")

        with open(request.file_path, "rb") as audio_file:
            files = {AUDIO_FILE_FIELD: (filename, audio_file, content_type)}
            response = await self._request("POST", url, params=params, files=files)

        post = AudioPost.from_response(self._decode_json(response))
        logger.info(f"Upload of {filename} created audio post {post.id}.")
        return post

    async def upload_post_from_url(self, request: UploadUrlRequest) -> AudioPost:
        """Importing audio from a URL is no longer served by Clyp; always raises."""
        logger.warning("Refusing upload from URL: the endpoint is not supported.")
        raise UnsupportedOperation("Uploading audio from a URL is not supported by the Clyp API.")

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def get_categories(self) -> List[Category]:
        return Category.list_from_response(await self._get_json(self._api("categorylist")))

    async def get_special_categories(self) -> List[Category]:
        return Category.list_from_response(await self._get_json(self._api("featuredlist")))

    async def get_posts_from_list(self, kind: ListKind) -> List[AudioPost]:
        """Get the posts of one of the curated listings."""
        endpoint = LIST_ENDPOINTS.get(kind) if isinstance(kind, ListKind) else None
        if endpoint is None:
            raise InvalidArgument(f"Unknown list kind: {kind!r}")
        return AudioPost.list_from_response(await self._get_json(f"{self.base_url}/{endpoint}"))

    async def get_posts(self, source: Union[Category, httpx.URL, str]) -> List[AudioPost]:
        """
        Get the posts listed at a category's URL.

        ``source`` may be a Category, or the category URL as ``httpx.URL`` or string.
        """
        if isinstance(source, (str, httpx.URL)):
            if not str(source):
                raise InvalidArgument("Must specify a category URL when getting posts.")
            source = Category(url=str(source))
        elif not isinstance(source, Category):
            raise InvalidArgument(f"Expected a Category or URL, got {type(source).__name__}.")
        return AudioPost.list_from_response(await self._get_json(source.url))

    async def get_posts_by_location(
        self,
        count: Optional[int] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> List[AudioPost]:
        """Get posts recorded near a location.

        Coordinates are only sent when both are given.
        """
        params: Dict[str, Any] = {}
        if count is not None:
            params["count"] = count
        if latitude is not None and longitude is not None:
            params["longitude"] = longitude
            params["latitude"] = latitude
        data = await self._get_json(self._api("featuredlist", "nearby"), params=params)
        return AudioPost.list_from_response(data)

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    async def get_playlist(self, playlist_id: str) -> Playlist:
        if not playlist_id:
            raise InvalidArgument("Must specify an ID when getting a playlist.")
        return Playlist.from_response(await self._get_json(self._api("playlist", playlist_id)))
