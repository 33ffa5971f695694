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

"""Use cases answering queries about pipeline state."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from deploy_stream.common.config import PipelineConfig
from deploy_stream.core.pipeline import catalog, gate
from deploy_stream.core.pipeline.entities import Application
from deploy_stream.core.pipeline.exceptions import ApplicationNotFoundError
from deploy_stream.core.pipeline.repositories import ApplicationRepository
from deploy_stream.core.pipeline.value_objects import (
    ApplicationId,
    Environment,
    RegionName,
)
from deploy_stream.orchestrator.pipeline.commands import (
    CheckDeployabilityCommand,
    GetPipelineStatusCommand,
)
from deploy_stream.orchestrator.pipeline.dtos import (
    DeployabilityResponse,
    JobTypeView,
    PipelineStatusResponse,
)

logger = logging.getLogger(__name__)


def _find_application(
    application_repo: ApplicationRepository,
    application_id: ApplicationId,
    correlation_id: str,
) -> Application:
    application = application_repo.find_by_id(application_id)
    if application is None:
        raise ApplicationNotFoundError(str(application_id), correlation_id)
    return application


class GetPipelineStatusUseCase:
    """Use case for reading the status of every job of an application."""

    def __init__(
        self,
        application_repo: ApplicationRepository,
        pipeline_config: PipelineConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._application_repo = application_repo
        self._pipeline_config = pipeline_config
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, command: GetPipelineStatusCommand) -> PipelineStatusResponse:
        """Return the pipeline status.

        Raises:
            ApplicationNotFoundError: If the application is not registered.
        """
        correlation_id = str(command.correlation_id)
        application = _find_application(
            self._application_repo, command.application_id, correlation_id
        )
        timeout_limit = self._clock() - timedelta(
            minutes=self._pipeline_config.job_timeout_minutes
        )
        return PipelineStatusResponse.from_application(
            application, self._pipeline_config.system, timeout_limit, correlation_id
        )


class CheckDeployabilityUseCase:
    """Use case for asking the promotion gate whether a change may be deployed."""

    def __init__(self, application_repo: ApplicationRepository) -> None:
        self._application_repo = application_repo

    def execute(self, command: CheckDeployabilityCommand) -> DeployabilityResponse:
        """Evaluate the promotion gate.

        Raises:
            ApplicationNotFoundError: If the application is not registered.
        """
        correlation_id = str(command.correlation_id)
        application = _find_application(
            self._application_repo, command.application_id, correlation_id
        )
        deployable = application.deployment_jobs.is_deployable_to(
            command.environment, command.change
        )
        required = gate.upstream_job(command.environment) if command.change else None
        logger.debug(
            "Gate for %s into %s: deployable=%s, correlation_id=%s",
            command.change,
            command.environment,
            deployable,
            correlation_id,
        )
        return DeployabilityResponse(
            application_id=str(command.application_id),
            environment=command.environment.value if command.environment else None,
            change=str(command.change) if command.change else None,
            deployable=deployable,
            required_job=required.job_name if required else None,
            correlation_id=correlation_id,
        )


class ListJobTypesUseCase:
    """Use case for listing the jobs of the configured system."""

    def __init__(self, pipeline_config: PipelineConfig) -> None:
        self._pipeline_config = pipeline_config

    def execute(
        self,
        environment: Optional[Environment] = None,
        region: Optional[RegionName] = None,
    ) -> List[JobTypeView]:
        """Return the jobs of the system, or the one job for an environment and region.

        The region is only needed for environments with more than one job.
        """
        system = self._pipeline_config.system
        if environment is None:
            job_types = catalog.job_types_for(system)
        else:
            if region is None and environment not in (Environment.TEST, Environment.STAGING):
                raise ValueError(f"A region is required for environment {environment.value}")
            job_type = catalog.from_environment_region(
                system, environment, region or RegionName("default")
            )
            job_types = (job_type,) if job_type else ()
        return [JobTypeView.from_job_type(job_type, system) for job_type in job_types]
