"""Tests for the read model repositories."""

import pytest

from edp_console.exceptions import DatabaseError
from edp_console.repositories import CDPipelineRepository, CodebaseRepository


class TestCodebaseRepository:
    @pytest.mark.asyncio
    async def test_branch_exists(self, test_session, seed_branch):
        await seed_branch("app-a", "master")
        repo = CodebaseRepository(test_session)

        assert await repo.branch_exists("app-a", "master") is True
        assert await repo.branch_exists("app-a", "develop") is False
        assert await repo.branch_exists("app-b", "master") is False


class TestCDPipelineRepository:
    @pytest.mark.asyncio
    async def test_find_pipeline_keeps_storage_order(self, test_session, seed_pipeline):
        await seed_pipeline("release-pipe", stages=[("qa", 2), ("dev", 0)])

        pipeline = await CDPipelineRepository(test_session).find_pipeline_by_name("release-pipe")

        assert [stage.name for stage in pipeline.stages] == ["qa", "dev"]
        assert pipeline.jenkins_link is None
        assert all(stage.openshift_project_link is None for stage in pipeline.stages)

    @pytest.mark.asyncio
    async def test_find_pipeline_branches(self, test_session, seed_pipeline):
        await seed_pipeline("release-pipe", branches=[("app-a", "master"), ("app-b", "develop")])

        pipeline = await CDPipelineRepository(test_session).find_pipeline_by_name("release-pipe")

        assert sorted((b.codebase_name, b.name) for b in pipeline.codebase_branches) == [
            ("app-a", "master"),
            ("app-b", "develop"),
        ]

    @pytest.mark.asyncio
    async def test_find_missing_pipeline(self, test_session):
        assert await CDPipelineRepository(test_session).find_pipeline_by_name("missing") is None

    @pytest.mark.asyncio
    async def test_driver_error_wrapped(self, test_session, failing_pipeline_queries):
        repo = CDPipelineRepository(test_session)

        with pytest.raises(DatabaseError, match="CDPipeline lookup of stage 'sit'"):
            await repo.find_stage("release-pipe", "sit")
