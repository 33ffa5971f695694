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

"""Use cases for maintaining the identity and job set of a pipeline."""

import logging
from datetime import timedelta

from deploy_stream.common.config import PipelineConfig
from deploy_stream.common.logging_utils import log_secure_info
from deploy_stream.core.pipeline import catalog
from deploy_stream.core.pipeline.entities import Application
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.orchestrator.pipeline.commands import (
    AssignProjectIdCommand,
    LinkIssueCommand,
    RemoveJobCommand,
)
from deploy_stream.orchestrator.pipeline.dtos import PipelineStatusResponse

logger = logging.getLogger(__name__)


class _PipelineUpdateUseCase:  # pylint: disable=too-few-public-methods
    """Shared wiring of use cases which update a pipeline and return its status."""

    def __init__(
        self,
        update_service: ApplicationUpdateService,
        pipeline_config: PipelineConfig,
    ) -> None:
        self._update_service = update_service
        self._pipeline_config = pipeline_config

    def _to_response(self, application: Application, correlation_id: str) -> PipelineStatusResponse:
        timeout_limit = self._update_service.now() - timedelta(
            minutes=self._pipeline_config.job_timeout_minutes
        )
        return PipelineStatusResponse.from_application(
            application, self._pipeline_config.system, timeout_limit, correlation_id
        )


class RemoveJobUseCase(_PipelineUpdateUseCase):
    """Use case for forgetting a job, e.g. when it is removed from the deployment configuration."""

    def execute(self, command: RemoveJobCommand) -> PipelineStatusResponse:
        """Remove the job's status.

        Raises:
            UnknownStageError: If the job name is not in the catalog.
            ApplicationNotFoundError: If the application is not registered.
        """
        correlation_id = str(command.correlation_id)
        job_type = catalog.from_job_name(command.job_name)
        application = self._update_service.update(
            command.application_id,
            lambda jobs: jobs.without(job_type),
            correlation_id=correlation_id,
        )
        log_secure_info(
            "info",
            f"Removed job {job_type}",
            correlation_id,
            application_id=str(command.application_id),
        )
        return self._to_response(application, correlation_id)


class AssignProjectIdUseCase(_PipelineUpdateUseCase):
    """Use case for setting the build system project id of an application."""

    def execute(self, command: AssignProjectIdCommand) -> PipelineStatusResponse:
        """Assign the project id.

        Raises:
            InvalidProjectIdError: If the project id is not positive.
            ApplicationNotFoundError: If the application is not registered.
        """
        correlation_id = str(command.correlation_id)
        application = self._update_service.update(
            command.application_id,
            lambda jobs: jobs.with_project_id(command.project_id),
            correlation_id=correlation_id,
        )
        logger.info(
            "Assigned project id %d to %s, correlation_id=%s",
            command.project_id,
            command.application_id,
            correlation_id,
        )
        return self._to_response(application, correlation_id)


class LinkIssueUseCase(_PipelineUpdateUseCase):
    """Use case for linking a pipeline to an issue, or unlinking it."""

    def execute(self, command: LinkIssueCommand) -> PipelineStatusResponse:
        """Link or unlink the issue.

        Raises:
            ApplicationNotFoundError: If the application is not registered.
        """
        correlation_id = str(command.correlation_id)
        application = self._update_service.update(
            command.application_id,
            lambda jobs: jobs.with_issue_id(command.issue_id),
            correlation_id=correlation_id,
        )
        logger.info(
            "Linked %s to issue %s, correlation_id=%s",
            command.application_id,
            command.issue_id,
            correlation_id,
        )
        return self._to_response(application, correlation_id)
