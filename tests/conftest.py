"""Shared fixtures: in-memory read model, in-memory resource store and API client."""

from collections.abc import AsyncGenerator, Awaitable, Callable, Sequence
from copy import deepcopy
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select

from edp_console.api.app import app
from edp_console.api.dependencies import get_platform_config, get_resource_client
from edp_console.exceptions import ResourceConflictError, ResourceNotFoundError
from edp_console.k8s import ResourceKind
from edp_console.models import (
    CDPipeline,
    CDPipelineCodebaseBranch,
    CDPipelineThirdPartyService,
    Codebase,
    CodebaseBranch,
    Stage,
    StageCodebaseStream,
    ThirdPartyService,
)
from edp_console.repositories import CDPipelineRepository, CodebaseRepository
from edp_console.services.cd_pipeline_service import CDPipelineService
from edp_console.services.codebase_service import CodebaseService
from edp_console.services.links import LinkBuilder
from edp_console.settings import PlatformConfig
from edp_console.utils.database import get_async_session

PLATFORM = PlatformConfig(
    tenant="mytenant", dns_wildcard="example.com", namespace="mytenant-edp-cicd"
)
NAMESPACE = PLATFORM.namespace


class InMemoryResourceClient:
    """Resource store keeping resources in a dict.

    Records every lookup and create, and raises injected errors for chosen
    resource names.
    """

    def __init__(self) -> None:
        self.resources: dict[tuple[str, str, str], dict[str, Any]] = {}
        self.gets: list[tuple[str, str]] = []
        self.creates: list[tuple[str, str]] = []
        self.get_errors: dict[tuple[str, str], Exception] = {}
        self.create_errors: dict[tuple[str, str], Exception] = {}

    def add(self, kind: ResourceKind, name: str, body: dict[str, Any] | None = None) -> None:
        self.resources[(kind.plural, NAMESPACE, name)] = body or {"metadata": {"name": name}}

    def stored(self, kind: ResourceKind, name: str) -> dict[str, Any] | None:
        return self.resources.get((kind.plural, NAMESPACE, name))

    def fail_get(self, kind: ResourceKind, name: str, error: Exception) -> None:
        self.get_errors[(kind.plural, name)] = error

    def fail_create(self, kind: ResourceKind, name: str, error: Exception) -> None:
        self.create_errors[(kind.plural, name)] = error

    async def get_optional(
        self, kind: ResourceKind, namespace: str, name: str
    ) -> dict[str, Any] | None:
        self.gets.append((kind.plural, name))
        if (kind.plural, name) in self.get_errors:
            raise self.get_errors[(kind.plural, name)]
        stored = self.resources.get((kind.plural, namespace, name))
        return deepcopy(stored) if stored is not None else None

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> dict[str, Any]:
        resource = await self.get_optional(kind, namespace, name)
        if resource is None:
            raise ResourceNotFoundError(kind.plural, namespace, name)
        return resource

    async def create(
        self, kind: ResourceKind, namespace: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        name = body["metadata"]["name"]
        if (kind.plural, name) in self.create_errors:
            raise self.create_errors[(kind.plural, name)]
        key = (kind.plural, namespace, name)
        if key in self.resources:
            raise ResourceConflictError(f"{kind.plural}/{name} already exists")
        self.resources[key] = deepcopy(body)
        self.creates.append((kind.plural, name))
        return deepcopy(body)


@pytest.fixture
def platform() -> PlatformConfig:
    return PLATFORM


@pytest.fixture
def links() -> LinkBuilder:
    return LinkBuilder.from_config(PLATFORM)


@pytest.fixture
def resources() -> InMemoryResourceClient:
    return InMemoryResourceClient()


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def service(test_session, resources) -> CDPipelineService:
    """Pipeline service over the test session and the in-memory resource store."""
    return CDPipelineService(
        pipeline_repo=CDPipelineRepository(test_session),
        codebase_service=CodebaseService(CodebaseRepository(test_session)),
        resources=resources,
        links=LinkBuilder.from_config(PLATFORM),
        namespace=NAMESPACE,
    )


@pytest.fixture
def seed_branch(test_session) -> Callable[[str, str], Awaitable[CodebaseBranch]]:
    """Factory adding a codebase branch, creating its codebase on first use."""

    async def _seed(codebase_name: str, branch_name: str) -> CodebaseBranch:
        result = await test_session.execute(select(Codebase).where(Codebase.name == codebase_name))
        codebase = result.scalars().first()
        if codebase is None:
            codebase = Codebase(name=codebase_name)
            test_session.add(codebase)
            await test_session.flush()

        branch = CodebaseBranch(name=branch_name, codebase_id=codebase.id)
        test_session.add(branch)
        await test_session.commit()
        return branch

    return _seed


@pytest.fixture
def seed_pipeline(test_session, seed_branch) -> Callable[..., Awaitable[None]]:
    """Factory adding a pipeline row as the reconciler would.

    Stages are ``(name, order)`` pairs inserted in the given order; branches
    are ``(codebase, branch)`` pairs deployed by the pipeline and every stage.
    """

    async def _seed(
        name: str,
        stages: Sequence[tuple[str, int]] = (),
        branches: Sequence[tuple[str, str]] = (),
        services: Sequence[str] = (),
        status: str = "active",
    ) -> None:
        pipeline = CDPipeline(name=name, status=status)
        test_session.add(pipeline)
        await test_session.flush()

        branch_ids = []
        for codebase_name, branch_name in branches:
            branch = await seed_branch(codebase_name, branch_name)
            branch_ids.append(branch.id)
            test_session.add(
                CDPipelineCodebaseBranch(cd_pipeline_id=pipeline.id, codebase_branch_id=branch.id)
            )

        for service_name in services:
            service = ThirdPartyService(name=service_name)
            test_session.add(service)
            await test_session.flush()
            test_session.add(
                CDPipelineThirdPartyService(
                    cd_pipeline_id=pipeline.id, third_party_service_id=service.id
                )
            )

        for stage_name, order in stages:
            stage = Stage(
                name=stage_name,
                description=f"{stage_name} environment",
                trigger_type="manual",
                quality_gate="manual",
                jenkins_step_name=f"deploy-{stage_name}",
                order=order,
                cd_pipeline_id=pipeline.id,
            )
            test_session.add(stage)
            await test_session.flush()
            for branch_id in branch_ids:
                test_session.add(
                    StageCodebaseStream(
                        stage_id=stage.id,
                        codebase_branch_id=branch_id,
                        input_is=f"{name}-{stage_name}-in",
                        output_is=f"{name}-{stage_name}-out",
                    )
                )

        await test_session.commit()
        # Reads must go through the eager-loading queries, not the identity map
        test_session.expunge_all()

    return _seed


@pytest_asyncio.fixture
async def client(test_session, resources) -> AsyncGenerator[AsyncClient, None]:
    """Create test API client."""

    async def override_get_session():
        yield test_session

    app.dependency_overrides[get_async_session] = override_get_session
    app.dependency_overrides[get_resource_client] = lambda: resources
    app.dependency_overrides[get_platform_config] = lambda: PLATFORM

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def failing_pipeline_queries(test_session, monkeypatch) -> None:
    """Make every query touching the ``cd_pipeline`` table fail in the driver."""
    execute = test_session.execute

    async def _execute(statement, *args, **kwargs):
        if "cd_pipeline" in str(statement):
            raise OperationalError(str(statement), {}, Exception("connection lost"))
        return await execute(statement, *args, **kwargs)

    monkeypatch.setattr(test_session, "execute", _execute)
