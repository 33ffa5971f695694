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

"""RecordJobTriggering use case implementation."""

import logging
from datetime import timedelta

from deploy_stream.common.config import PipelineConfig
from deploy_stream.common.logging_utils import log_secure_info
from deploy_stream.core.pipeline import catalog
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.orchestrator.pipeline.commands import RecordJobTriggeringCommand
from deploy_stream.orchestrator.pipeline.dtos import PipelineStatusResponse

logger = logging.getLogger(__name__)


class RecordJobTriggeringUseCase:
    """Use case for recording that a job was dispatched to the build system.

    A new triggering replaces the previous one, also while the job is
    still running. Completion history is kept.
    """

    def __init__(
        self,
        update_service: ApplicationUpdateService,
        pipeline_config: PipelineConfig,
    ) -> None:
        self._update_service = update_service
        self._pipeline_config = pipeline_config

    def execute(self, command: RecordJobTriggeringCommand) -> PipelineStatusResponse:
        """Record the triggering.

        Raises:
            UnknownStageError: If the job name is not in the catalog.
            ApplicationNotFoundError: If the application is not registered.
            ConcurrentUpdateError: If the record kept being updated concurrently.
        """
        correlation_id = str(command.correlation_id)
        job_type = catalog.from_job_name(command.job_name)
        trigger_time = self._update_service.now()
        timeout_limit = trigger_time - timedelta(
            minutes=self._pipeline_config.job_timeout_minutes
        )

        outcome = {"was_running": False}

        def trigger(jobs):
            outcome["was_running"] = jobs.is_running(timeout_limit, job_type)
            return jobs.with_triggering(
                job_type,
                command.change,
                command.version,
                command.revision,
                command.reason,
                trigger_time,
            )

        application = self._update_service.update(
            command.application_id, trigger, correlation_id=correlation_id
        )

        if outcome["was_running"]:
            logger.info(
                "Re-triggered %s which was still running, correlation_id=%s",
                job_type,
                correlation_id,
            )
        log_secure_info(
            "info",
            f"Triggered {job_type} on {command.version}: {command.reason}",
            correlation_id,
            application_id=str(command.application_id),
        )
        return PipelineStatusResponse.from_application(
            application, self._pipeline_config.system, timeout_limit, correlation_id
        )
