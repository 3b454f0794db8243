"""Tests for KubernetesResourceClient against a mocked API server."""

import json

import httpx
import pytest

from edp_console.exceptions import (
    ResourceClientError,
    ResourceConflictError,
    ResourceNotFoundError,
)
from edp_console.k8s import CD_PIPELINE_KIND, STAGE_KIND, KubernetesResourceClient
from edp_console.settings import Settings

BASE_URL = "https://k8s.test"
NAMESPACE = "edp-edp-cicd"


def make_client(handler) -> KubernetesResourceClient:
    return KubernetesResourceClient(
        BASE_URL, token="secret", transport=httpx.MockTransport(handler)
    )


class TestGetOptional:
    @pytest.mark.asyncio
    async def test_found(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"metadata": {"name": "release-pipe"}})

        async with make_client(handler) as client:
            resource = await client.get_optional(CD_PIPELINE_KIND, NAMESPACE, "release-pipe")

        assert resource == {"metadata": {"name": "release-pipe"}}
        assert seen[0].method == "GET"
        assert seen[0].url.path == (
            "/apis/edp.epam.com/v1alpha1/namespaces/edp-edp-cicd/cdpipelines/release-pipe"
        )
        assert seen[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_not_found_is_none(self):
        async with make_client(lambda request: httpx.Response(404)) as client:
            assert await client.get_optional(STAGE_KIND, NAMESPACE, "release-pipe-sit") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        async with make_client(lambda request: httpx.Response(500, text="etcd down")) as client:
            with pytest.raises(ResourceClientError) as exc_info:
                await client.get_optional(CD_PIPELINE_KIND, NAMESPACE, "release-pipe")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_forbidden_is_not_absence(self):
        async with make_client(lambda request: httpx.Response(403)) as client:
            with pytest.raises(ResourceClientError):
                await client.get_optional(CD_PIPELINE_KIND, NAMESPACE, "release-pipe")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ResourceClientError):
                await client.get_optional(CD_PIPELINE_KIND, NAMESPACE, "release-pipe")


class TestGet:
    @pytest.mark.asyncio
    async def test_missing_raises_not_found(self):
        async with make_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(ResourceNotFoundError):
                await client.get(CD_PIPELINE_KIND, NAMESPACE, "release-pipe")


class TestCreate:
    @pytest.mark.asyncio
    async def test_posts_to_collection(self):
        seen: list[httpx.Request] = []
        body = {"metadata": {"name": "release-pipe-sit"}, "spec": {"order": 0}}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=json.loads(request.content))

        async with make_client(handler) as client:
            created = await client.create(STAGE_KIND, NAMESPACE, body)

        assert created == body
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/apis/edp.epam.com/v1alpha1/namespaces/edp-edp-cicd/stages"

    @pytest.mark.asyncio
    async def test_conflict(self):
        async with make_client(lambda request: httpx.Response(409)) as client:
            with pytest.raises(ResourceConflictError):
                await client.create(STAGE_KIND, NAMESPACE, {"metadata": {"name": "x"}})

    @pytest.mark.asyncio
    async def test_rejected(self):
        async with make_client(lambda request: httpx.Response(422)) as client:
            with pytest.raises(ResourceClientError) as exc_info:
                await client.create(STAGE_KIND, NAMESPACE, {"metadata": {"name": "x"}})

        assert not isinstance(exc_info.value, ResourceConflictError)
        assert exc_info.value.status_code == 422


class TestFromSettings:
    def test_reads_token_file(self, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("file-token\n")
        settings = Settings(k8s_api_url=BASE_URL, k8s_token_path=str(token_file))

        client = KubernetesResourceClient.from_settings(settings)

        assert client.base_url == BASE_URL
        assert client._client.headers["Authorization"] == "Bearer file-token"

    def test_explicit_token_wins(self, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("file-token")
        settings = Settings(k8s_token="env-token", k8s_token_path=str(token_file))

        client = KubernetesResourceClient.from_settings(settings)

        assert client._client.headers["Authorization"] == "Bearer env-token"

    def test_anonymous_without_token(self, tmp_path):
        settings = Settings(k8s_token_path=str(tmp_path / "missing"))

        client = KubernetesResourceClient.from_settings(settings)

        assert "Authorization" not in client._client.headers
