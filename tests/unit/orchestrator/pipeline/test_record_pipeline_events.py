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

"""Unit tests for use cases recording pipeline events."""

# pylint: disable=redefined-outer-name,too-many-arguments,too-many-positional-arguments

import logging

import pytest

from deploy_stream.common import logging_utils
from deploy_stream.core.pipeline.entities import Application
from deploy_stream.core.pipeline.exceptions import (
    ApplicationAlreadyExistsError,
    ApplicationNotFoundError,
    InvalidProjectIdError,
    OptimisticLockError,
    UnknownStageError,
)
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.core.pipeline.value_objects import (
    ApplicationId,
    IssueId,
    VersionChange,
)
from deploy_stream.infra.repositories import InMemoryApplicationRepository
from deploy_stream.orchestrator.pipeline.commands import (
    AssignProjectIdCommand,
    LinkIssueCommand,
    RecordJobCompletionCommand,
    RecordJobTriggeringCommand,
    RegisterApplicationCommand,
    RemoveJobCommand,
)
from deploy_stream.orchestrator.pipeline.use_cases import (
    AssignProjectIdUseCase,
    LinkIssueUseCase,
    RecordJobCompletionUseCase,
    RecordJobTriggeringUseCase,
    RegisterApplicationUseCase,
    RemoveJobUseCase,
    record_triggering,
)


class RetriedSaveRepository(InMemoryApplicationRepository):
    """Repository rejecting the next ``conflicts`` updates as stale."""

    def __init__(self) -> None:
        super().__init__()
        self.conflicts = 0

    def save(self, application: Application) -> None:
        if self.conflicts > 0 and application.version > 1:
            self.conflicts -= 1
            raise OptimisticLockError(
                entity_type="Application",
                entity_id=str(application.application_id),
                expected_version=application.version - 1,
                actual_version=application.version,
            )
        super().save(application)


@pytest.fixture
def complete(update_service, pipeline_config, application_id, correlation_id):
    """Record a completion through the use case."""
    use_case = RecordJobCompletionUseCase(update_service, pipeline_config)

    def _complete(job_name, build_number, project_id=42, job_error=None):
        return use_case.execute(
            RecordJobCompletionCommand(
                application_id=application_id,
                job_name=job_name,
                project_id=project_id,
                build_number=build_number,
                job_error=job_error,
                correlation_id=correlation_id,
            )
        )

    return _complete


@pytest.fixture
def trigger(update_service, pipeline_config, application_id, correlation_id, version_a):
    """Record a triggering through the use case."""
    use_case = RecordJobTriggeringUseCase(update_service, pipeline_config)

    def _trigger(job_name, version=None, revision=None, change=None, reason="test"):
        version = version or version_a
        return use_case.execute(
            RecordJobTriggeringCommand(
                application_id=application_id,
                job_name=job_name,
                change=change if change is not None else VersionChange(version),
                version=version,
                revision=revision,
                reason=reason,
                correlation_id=correlation_id,
            )
        )

    return _trigger


def _job(response, job_name):
    return next(job for job in response.jobs if job.job_name == job_name)


class TestRegisterApplicationUseCase:
    """Tests for RegisterApplicationUseCase."""

    def test_registers_empty_pipeline(self, application_repo, application_id, clock,
                                      correlation_id):
        use_case = RegisterApplicationUseCase(application_repo, clock=clock)

        result = use_case.execute(RegisterApplicationCommand(application_id, correlation_id))

        assert result.application_id == "tenant1:app1:default"
        assert result.version == 1
        assert result.created_at == clock().isoformat()
        assert result.correlation_id == "corr-use-case-1"
        stored = application_repo.find_by_id(application_id)
        assert len(stored.deployment_jobs.job_status) == 0

    def test_registering_twice_raises(self, application_repo, registered_application,
                                      correlation_id):
        use_case = RegisterApplicationUseCase(application_repo)
        with pytest.raises(ApplicationAlreadyExistsError):
            use_case.execute(
                RegisterApplicationCommand(registered_application.application_id, correlation_id)
            )


class TestRecordJobCompletionUseCase:
    """Tests for RecordJobCompletionUseCase."""

    def test_success_is_recorded(self, registered_application, complete, clock):
        response = complete("system-test", 3)

        job = _job(response, "system-test")
        assert response.project_id == 42
        assert response.version == 2
        assert not response.has_failures
        assert job.last_completed.build_number == 3
        assert job.last_completed.notified_at == clock().isoformat()
        assert job.last_success is not None
        assert job.last_success_run is None
        assert job.zone == "test.us-east-1"
        assert job.environment == "test"

    def test_failure_is_recorded(self, registered_application, complete):
        response = complete("production-us-east-3", 3, job_error="outOfCapacity")

        job = _job(response, "production-us-east-3")
        assert response.has_failures
        assert job.failing
        assert job.last_completed.job_error == "outOfCapacity"
        assert job.first_failing.build_number == 3
        assert job.last_success is None

    def test_stale_report_is_ignored(self, registered_application, complete, clock):
        complete("system-test", 5)
        clock.advance(minutes=1)

        response = complete("system-test", 4, job_error="unknown")

        assert response.version == 2
        assert not response.has_failures
        assert _job(response, "system-test").last_completed.build_number == 5

    def test_stale_report_is_logged_as_ignored(self, registered_application, complete,
                                               clock, caplog):
        complete("system-test", 5)
        clock.advance(minutes=1)

        with caplog.at_level(logging.INFO, logger=logging_utils.__name__):
            complete("system-test", 4, job_error="unknown")

        assert "Ignored report of system-test build 4" in caplog.text
        assert "completed with error" not in caplog.text

    def test_unknown_job_raises(self, registered_application, complete):
        with pytest.raises(UnknownStageError):
            complete("production-mars-1", 1)

    def test_invalid_project_id_raises(self, registered_application, complete):
        with pytest.raises(InvalidProjectIdError):
            complete("system-test", 1, project_id=0)

    def test_unknown_application_raises(self, complete):
        with pytest.raises(ApplicationNotFoundError):
            complete("system-test", 1)


class TestRecordJobTriggeringUseCase:
    """Tests for RecordJobTriggeringUseCase."""

    def test_triggering_marks_job_running(self, registered_application, trigger, clock,
                                          version_a):
        response = trigger("staging-test", reason="upgrade")

        job = _job(response, "staging-test")
        assert response.is_running
        assert job.running
        assert job.last_triggered.version == str(version_a)
        assert job.last_triggered.is_version_change
        assert job.last_triggered.reason == "upgrade"
        assert job.last_triggered.at == clock().isoformat()

    def test_retrigger_while_running(self, registered_application, trigger, clock):
        trigger("staging-test", reason="first")
        clock.advance(minutes=5)

        response = trigger("staging-test", reason="second")

        assert _job(response, "staging-test").last_triggered.reason == "second"

    def test_retrigger_logged_once_when_update_is_retried(
        self, application_id, pipeline_config, clock, start_time, correlation_id,
        version_a, caplog
    ):
        repo = RetriedSaveRepository()
        repo.save(Application(
            application_id=application_id, created_at=start_time, updated_at=start_time
        ))
        use_case = RecordJobTriggeringUseCase(
            ApplicationUpdateService(repo, max_attempts=3, clock=clock), pipeline_config
        )
        command = RecordJobTriggeringCommand(
            application_id=application_id,
            job_name="staging-test",
            change=VersionChange(version_a),
            version=version_a,
            revision=None,
            reason="upgrade",
            correlation_id=correlation_id,
        )
        use_case.execute(command)
        clock.advance(minutes=5)
        repo.conflicts = 2

        with caplog.at_level(logging.INFO, logger=record_triggering.__name__):
            use_case.execute(command)

        assert repo.conflicts == 0
        assert caplog.text.count("Re-triggered staging-test") == 1

    def test_completion_after_triggering_ties_success_to_run(
        self, registered_application, trigger, complete, clock, version_a
    ):
        trigger("system-test")
        clock.advance(minutes=10)

        response = complete("system-test", 1)

        job = _job(response, "system-test")
        assert not job.running
        assert job.last_success_run.version == str(version_a)

    def test_unknown_job_raises(self, registered_application, trigger):
        with pytest.raises(UnknownStageError):
            trigger("production-mars-1")


class TestManagePipelineUseCases:
    """Tests for removing jobs, assigning project ids, and linking issues."""

    def test_remove_job(self, registered_application, complete, update_service,
                        pipeline_config, application_id, correlation_id):
        complete("component", 1)
        complete("system-test", 1)

        response = RemoveJobUseCase(update_service, pipeline_config).execute(
            RemoveJobCommand(application_id, "component", correlation_id)
        )

        assert [job.job_name for job in response.jobs] == ["system-test"]

    def test_remove_unknown_job_raises(self, registered_application, update_service,
                                       pipeline_config, application_id, correlation_id):
        with pytest.raises(UnknownStageError):
            RemoveJobUseCase(update_service, pipeline_config).execute(
                RemoveJobCommand(application_id, "nope", correlation_id)
            )

    def test_assign_project_id(self, registered_application, update_service, pipeline_config,
                               application_id, correlation_id):
        response = AssignProjectIdUseCase(update_service, pipeline_config).execute(
            AssignProjectIdCommand(application_id, 7, correlation_id)
        )
        assert response.project_id == 7

    def test_assign_invalid_project_id_raises(self, registered_application, update_service,
                                              pipeline_config, application_id, correlation_id):
        with pytest.raises(InvalidProjectIdError):
            AssignProjectIdUseCase(update_service, pipeline_config).execute(
                AssignProjectIdCommand(application_id, -5, correlation_id)
            )

    def test_link_and_unlink_issue(self, registered_application, update_service,
                                   pipeline_config, application_id, correlation_id):
        use_case = LinkIssueUseCase(update_service, pipeline_config)

        linked = use_case.execute(LinkIssueCommand(application_id, IssueId("OPS-1"), correlation_id))
        unlinked = use_case.execute(LinkIssueCommand(application_id, None, correlation_id))

        assert linked.issue_id == "OPS-1"
        assert unlinked.issue_id is None

    def test_unknown_application_raises(self, update_service, pipeline_config, correlation_id):
        with pytest.raises(ApplicationNotFoundError):
            AssignProjectIdUseCase(update_service, pipeline_config).execute(
                AssignProjectIdCommand(ApplicationId("t9", "a9"), 7, correlation_id)
            )