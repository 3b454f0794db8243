"""Async client for the orchestrator custom-resource API."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, cast

import httpx

from edp_console.exceptions import (
    ResourceClientError,
    ResourceConflictError,
    ResourceNotFoundError,
)
from edp_console.settings import Settings
from edp_console.utils.logger import logger


@dataclass(frozen=True)
class ResourceKind:
    """Custom resource type addressed by API group, version and plural."""

    group: str
    version: str
    plural: str
    kind: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def collection_path(self, namespace: str) -> str:
        return f"/apis/{self.group}/{self.version}/namespaces/{namespace}/{self.plural}"

    def item_path(self, namespace: str, name: str) -> str:
        return f"{self.collection_path(namespace)}/{name}"


CD_PIPELINE_KIND = ResourceKind("edp.epam.com", "v1alpha1", "cdpipelines", "CDPipeline")
STAGE_KIND = ResourceKind("edp.epam.com", "v1alpha1", "stages", "Stage")


class ResourceClient(Protocol):
    """Get and create custom resources by name.

    ``get_optional`` returns None only when the store reports not-found;
    every other failure raises ``ResourceClientError``.
    """

    async def get_optional(
        self, kind: ResourceKind, namespace: str, name: str
    ) -> dict[str, Any] | None: ...

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> dict[str, Any]: ...

    async def create(
        self, kind: ResourceKind, namespace: str, body: dict[str, Any]
    ) -> dict[str, Any]: ...


class KubernetesResourceClient:
    """Custom-resource client speaking the Kubernetes REST API over httpx.

    Args:
        base_url: API server URL (e.g. ``https://kubernetes.default.svc``).
        token: Bearer token; omitted from requests when None.
        verify: TLS verification flag or CA bundle path.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        verify: bool | str = True,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            verify=verify,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "KubernetesResourceClient":
        """Build a client from settings, falling back to the service account token.

        Args:
            settings: Application settings

        Returns:
            Configured client
        """
        token = settings.k8s_token
        token_path = Path(settings.k8s_token_path)
        if token is None and token_path.is_file():
            token = token_path.read_text().strip()
        if token is None:
            logger.warning("No orchestrator token configured, requests will be anonymous")

        verify: bool | str = settings.k8s_verify_ssl
        if settings.k8s_verify_ssl and settings.k8s_ca_path:
            verify = settings.k8s_ca_path

        return cls(settings.k8s_api_url, token=token, verify=verify, timeout=settings.k8s_timeout)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise ResourceClientError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise ResourceClientError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _error(method: str, path: str, response: httpx.Response) -> ResourceClientError:
        message = f"{method} {path} returned {response.status_code}: {response.text}"
        if response.status_code == 409:
            return ResourceConflictError(message)
        return ResourceClientError(message, status_code=response.status_code)

    async def get_optional(
        self, kind: ResourceKind, namespace: str, name: str
    ) -> dict[str, Any] | None:
        """Get a resource by name.

        Args:
            kind: Resource kind
            namespace: Namespace of the resource
            name: Resource name

        Returns:
            Resource body, or None if it does not exist

        Raises:
            ResourceClientError: On any failure other than not-found
        """
        path = kind.item_path(namespace, name)
        response = await self._request("GET", path)
        if response.status_code == 404:
            logger.debug(f"Resource {kind.plural}/{name} doesn't exist")
            return None
        if response.status_code != 200:
            raise self._error("GET", path, response)
        return cast("dict[str, Any]", response.json())

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> dict[str, Any]:
        """Get a resource by name or raise ResourceNotFoundError."""
        resource = await self.get_optional(kind, namespace, name)
        if resource is None:
            raise ResourceNotFoundError(kind.plural, namespace, name)
        return resource

    async def create(
        self, kind: ResourceKind, namespace: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a resource.

        Args:
            kind: Resource kind
            namespace: Target namespace
            body: Resource body

        Returns:
            Resource as stored by the API server

        Raises:
            ResourceConflictError: If a resource with the same name exists
            ResourceClientError: On any other failure
        """
        path = kind.collection_path(namespace)
        response = await self._request("POST", path, json=body)
        if response.status_code not in (200, 201, 202):
            raise self._error("POST", path, response)
        return cast("dict[str, Any]", response.json())

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "KubernetesResourceClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
