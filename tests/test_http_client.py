"""
Unit tests for the authenticated Webpublication HTTP client.
"""
import httpx
import pytest

from webpub_mcp.exceptions import (
    HttpConnectionError,
    HttpStatusError,
    MalformedResponseError,
)
from webpub_mcp.services.http_client import ApiEndpoint, WebPublicationClient, join_url


@pytest.mark.unit
def test_join_url_normalises_slashes():
    assert join_url("https://api.example.test/wp/", "/generationWs/x") == "https://api.example.test/wp/generationWs/x"
    assert join_url("https://api.example.test/wp", "generationWs/x") == "https://api.example.test/wp/generationWs/x"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_json_sends_cookie_and_client_id(client, remote):
    """Test every API call carries the WP_token cookie and clientId"""
    remote.route("/workspaceManagerWs/getResource", httpx.Response(200, json={"globalId": 1}))

    result = await client.get_json(ApiEndpoint.WORKSPACE_MANAGER, "getResource", {"resourceGId": 1})

    assert result == {"globalId": 1}
    assert len(remote.requests) == 1
    request = remote.requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith("https://api.example.test/wp/workspaceManagerWs/getResource")
    assert request.headers["cookie"] == "WP_token=secret-token"
    assert request.url.params["clientId"] == "client-42"
    assert request.url.params["resourceGId"] == "1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_put_json_sends_body(client, remote):
    remote.route("/generationWs/updatePublicationSettings", lambda request: httpx.Response(200, content=request.content))

    result = await client.put_json(ApiEndpoint.GENERATION, "updatePublicationSettings", {"wishlistEnabled": True})

    assert result == {"wishlistEnabled": True}
    assert remote.requests[0].method == "PUT"
    assert remote.requests[0].headers["content-type"] == "application/json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_bytes_uses_drive_url_and_token(client, remote):
    """Test drive fetches go to DRIVE_URL/CLIENT_ID/rel_url and return raw bytes"""
    remote.route("/files/client-42/img/abc.png", httpx.Response(200, content=b"\x89PNG"))

    data = await client.get_bytes("/img/abc.png")

    assert data == b"\x89PNG"
    request = remote.requests[0]
    assert request.url.host == "drive.example.test"
    assert request.url.path == "/files/client-42/img/abc.png"
    assert request.url.params["token"] == "drive-token"
    assert request.headers["cookie"] == "WP_token=secret-token"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_2xx_raises_status_error(client, remote):
    remote.route("/getResource", httpx.Response(403, json={"error": "forbidden"}))

    with pytest.raises(HttpStatusError) as exc_info:
        await client.get_json(ApiEndpoint.WORKSPACE_MANAGER, "getResource")

    assert exc_info.value.status_code == 403
    assert exc_info.value.retryable is False
    assert len(remote.requests) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_server_error_is_retryable_but_not_retried(client, remote):
    """Test a 503 is reported as retryable and only one attempt is made"""
    remote.route("/getResource", httpx.Response(503))

    with pytest.raises(HttpStatusError) as exc_info:
        await client.get_json(ApiEndpoint.WORKSPACE_MANAGER, "getResource")

    assert exc_info.value.retryable is True
    assert len(remote.requests) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_invalid_json_raises_malformed_response(client, remote):
    remote.route("/getResource", httpx.Response(200, content=b"<html>login</html>"))

    with pytest.raises(MalformedResponseError) as exc_info:
        await client.get_json(ApiEndpoint.WORKSPACE_MANAGER, "getResource")

    assert exc_info.value.status_code == 200
    assert exc_info.value.to_dict()["kind"] == "HttpError"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_failure_raises_connection_error(config):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = WebPublicationClient(config, transport=httpx.MockTransport(refuse))

    with pytest.raises(HttpConnectionError) as exc_info:
        await client.get_json(ApiEndpoint.GENERATION, "getPublicationSettings")

    assert exc_info.value.status_code is None
    assert exc_info.value.retryable is True
    await client.aclose()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_client_uses_configured_timeout(config):
    async with WebPublicationClient(config) as client:
        assert client._client.timeout.read == 30.0
