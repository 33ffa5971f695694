# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for ApplicationUpdateService."""

# pylint: disable=redefined-outer-name

from datetime import timedelta

import pytest

from deploy_stream.core.pipeline.entities import Application, DeploymentJobs
from deploy_stream.core.pipeline.exceptions import (
    ApplicationNotFoundError,
    ConcurrentUpdateError,
    OptimisticLockError,
)
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.infra.repositories import InMemoryApplicationRepository


class ConflictingRepository(InMemoryApplicationRepository):
    """Repository where another writer saves before each of our first saves."""

    def __init__(self, conflicts: int) -> None:
        super().__init__()
        self.conflicts = conflicts
        self.save_attempts = 0

    def save(self, application: Application) -> None:
        self.save_attempts += 1
        if self.conflicts > 0 and application.version > 1:
            self.conflicts -= 1
            current = self.find_by_id(application.application_id)
            super().save(current.with_deployment_jobs(current.deployment_jobs.with_project_id(
                (current.deployment_jobs.project_id or 0) + 100
            )))
        super().save(application)


@pytest.fixture
def registered(application_id, start_time):
    """Application registered with an empty pipeline."""
    return Application(
        application_id=application_id,
        deployment_jobs=DeploymentJobs.empty(),
        created_at=start_time,
        updated_at=start_time,
    )


class TestApplicationUpdateService:
    """Tests for the optimistic update loop."""

    def test_update_saves_next_version(self, registered, clock):
        repo = InMemoryApplicationRepository()
        repo.save(registered)
        service = ApplicationUpdateService(repo, clock=clock)
        clock.advance(minutes=1)

        updated = service.update(registered.application_id, lambda jobs: jobs.with_project_id(7))

        assert updated.version == 2
        assert updated.deployment_jobs.project_id == 7
        assert updated.updated_at == clock()
        assert repo.find_by_id(registered.application_id) == updated

    def test_unchanged_snapshot_is_not_saved(self, registered):
        repo = InMemoryApplicationRepository()
        repo.save(registered)
        service = ApplicationUpdateService(repo)

        result = service.update(registered.application_id, lambda jobs: jobs)

        assert result.version == 1

    def test_unknown_application_raises(self, application_id):
        service = ApplicationUpdateService(InMemoryApplicationRepository())
        with pytest.raises(ApplicationNotFoundError) as exc_info:
            service.update(application_id, lambda jobs: jobs, correlation_id="corr-1")
        assert exc_info.value.correlation_id == "corr-1"

    def test_conflict_is_retried_on_fresh_state(self, registered):
        repo = ConflictingRepository(conflicts=2)
        repo.save(registered)
        service = ApplicationUpdateService(repo, max_attempts=3)

        updated = service.update(
            registered.application_id,
            lambda jobs: jobs.with_project_id((jobs.project_id or 0) + 1),
        )

        # two concurrent writers each added 100 before we added 1
        assert updated.deployment_jobs.project_id == 201
        assert updated.version == 4
        assert repo.find_by_id(registered.application_id) == updated

    def test_gives_up_after_max_attempts(self, registered):
        repo = ConflictingRepository(conflicts=10)
        repo.save(registered)
        service = ApplicationUpdateService(repo, max_attempts=3)

        with pytest.raises(ConcurrentUpdateError) as exc_info:
            service.update(
                registered.application_id,
                lambda jobs: jobs.with_project_id((jobs.project_id or 0) + 1),
            )
        assert exc_info.value.attempts == 3

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            ApplicationUpdateService(InMemoryApplicationRepository(), max_attempts=0)

    def test_now_uses_clock(self, clock, start_time):
        service = ApplicationUpdateService(InMemoryApplicationRepository(), clock=clock)
        assert service.now() == start_time
        clock.advance(hours=1)
        assert service.now() == start_time + timedelta(hours=1)


class TestInMemoryRepositoryLocking:
    """Tests for the version check the update service relies on."""

    def test_stale_save_raises(self, registered):
        repo = InMemoryApplicationRepository()
        repo.save(registered)
        first = registered.with_deployment_jobs(DeploymentJobs(project_id=1))
        second = registered.with_deployment_jobs(DeploymentJobs(project_id=2))
        repo.save(first)
        with pytest.raises(OptimisticLockError):
            repo.save(second)
