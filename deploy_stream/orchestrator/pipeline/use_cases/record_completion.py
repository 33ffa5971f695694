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

"""RecordJobCompletion use case implementation."""

from datetime import timedelta

from deploy_stream.common.config import PipelineConfig
from deploy_stream.common.logging_utils import log_secure_info
from deploy_stream.core.pipeline import catalog
from deploy_stream.core.pipeline.entities import JobError, JobReport
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.orchestrator.pipeline.commands import RecordJobCompletionCommand
from deploy_stream.orchestrator.pipeline.dtos import PipelineStatusResponse


class RecordJobCompletionUseCase:
    """Use case for recording a completion report from the build system.

    Reports are accepted for jobs which were never triggered, since the
    build system knows best what has run. The report also establishes the
    project id of the application.

    Attributes:
        update_service: Optimistic update service for application records.
        pipeline_config: System and job timeout settings.
    """

    def __init__(
        self,
        update_service: ApplicationUpdateService,
        pipeline_config: PipelineConfig,
    ) -> None:
        self._update_service = update_service
        self._pipeline_config = pipeline_config

    def execute(self, command: RecordJobCompletionCommand) -> PipelineStatusResponse:
        """Record the completion.

        Raises:
            UnknownStageError: If the job name is not in the catalog.
            ApplicationNotFoundError: If the application is not registered.
            InvalidProjectIdError: If the reported project id is not positive.
            ConcurrentUpdateError: If the record kept being updated concurrently.
        """
        correlation_id = str(command.correlation_id)
        job_type = catalog.from_job_name(command.job_name)
        report = JobReport(
            application_id=command.application_id,
            job_type=job_type,
            project_id=command.project_id,
            build_number=command.build_number,
            job_error=JobError(command.job_error) if command.job_error else None,
        )
        notification_time = self._update_service.now()

        outcome = {"ignored": False}

        def complete(jobs):
            updated = jobs.with_completion(
                report, notification_time, clock=self._update_service.now
            )
            outcome["ignored"] = updated is jobs
            return updated

        application = self._update_service.update(
            command.application_id, complete, correlation_id=correlation_id
        )

        if outcome["ignored"]:
            log_secure_info(
                "info",
                f"Ignored report of {job_type} build {report.build_number}, "
                "a later build is already recorded",
                correlation_id,
                application_id=str(command.application_id),
            )
        elif report.success:
            log_secure_info(
                "info",
                f"Job {job_type} build {report.build_number} completed successfully",
                correlation_id,
                application_id=str(command.application_id),
            )
        else:
            log_secure_info(
                "warning",
                f"Job {job_type} build {report.build_number} completed "
                f"with error {report.job_error.value}",
                correlation_id,
                application_id=str(command.application_id),
            )
        timeout_limit = notification_time - timedelta(
            minutes=self._pipeline_config.job_timeout_minutes
        )
        return PipelineStatusResponse.from_application(
            application, self._pipeline_config.system, timeout_limit, correlation_id
        )
