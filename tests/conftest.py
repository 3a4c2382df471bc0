"""
Pytest configuration and fixtures for Webpublication MCP tests.

The remote API is replaced by an httpx.MockTransport that records every
outbound request, so tests can assert on exactly what went over the wire.
"""
from typing import Callable, Dict, List, Union

import httpx
import pytest

from webpub_mcp.config import WebPublicationConfig
from webpub_mcp.registry import ToolDispatcher
from webpub_mcp.services.http_client import WebPublicationClient

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class MockRemote:
    """Fake Webpublication API routing by URL path suffix"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Responder] = {}

    def route(self, path_suffix: str, responder: Responder) -> None:
        self.routes[path_suffix] = responder

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, responder in self.routes.items():
            if request.url.path.endswith(suffix):
                return responder(request) if callable(responder) else responder
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def config():
    """
    Test configuration, independent of the environment and any .env file.
    """
    return WebPublicationConfig(
        _env_file=None,
        API_URL="https://api.example.test/wp/",
        DRIVE_URL="https://drive.example.test/files/",
        CLIENT_ID="client-42",
        WP_TOKEN="secret-token",
        DRIVE_TOKEN="drive-token",
    )


@pytest.fixture
def remote():
    return MockRemote()


@pytest.fixture
def client(config, remote):
    return WebPublicationClient(config, transport=httpx.MockTransport(remote.handle))


@pytest.fixture
def dispatcher(client):
    return ToolDispatcher(client)


@pytest.fixture
def sample_resource():
    """
    Sample getResource payload; months are zero-based.
    """
    return {
        "globalId": 2473843,
        "label": "Spring catalogue",
        "type": "PUBLICATION",
        "creationDate": {"year": 2024, "month": 0, "day": 15},
        "lastModification": {"year": 2024, "month": 11, "day": 2},
    }


@pytest.fixture
def sample_settings():
    return {
        "globalId": 2473843,
        "wishlistEnabled": False,
        "coverImage": {"relUrl": "/img/abc"},
    }
