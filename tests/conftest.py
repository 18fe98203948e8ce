"""Shared fixtures for the Clyp client tests."""

from typing import Callable, List

import httpx
import pytest

from clyp.services.client import ClypClient

API_URL = "https://api.test"
UPLOAD_URL = "https://upload.test"


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_clyp(sent_requests) -> Callable[[Callable[[httpx.Request], httpx.Response]], ClypClient]:
    """Build a ClypClient whose transport answers with ``responder`` and records every request."""

    def factory(responder):
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return responder(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ClypClient(http_client, base_url=API_URL, upload_url=UPLOAD_URL)

    return factory


@pytest.fixture
def audio_file(tmp_path):
    file_path = tmp_path / "song.mp3"
    file_path.write_bytes(b"ID3 dummy audio content")
    return file_path
