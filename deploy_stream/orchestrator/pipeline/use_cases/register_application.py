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

"""RegisterApplication use case implementation."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from deploy_stream.common.logging_utils import log_secure_info
from deploy_stream.core.pipeline.entities import Application, DeploymentJobs
from deploy_stream.core.pipeline.exceptions import (
    ApplicationAlreadyExistsError,
    OptimisticLockError,
)
from deploy_stream.core.pipeline.repositories import ApplicationRepository
from deploy_stream.orchestrator.pipeline.commands import RegisterApplicationCommand
from deploy_stream.orchestrator.pipeline.dtos import ApplicationResponse

logger = logging.getLogger(__name__)


class RegisterApplicationUseCase:
    """Use case for registering an application with an empty pipeline.

    Attributes:
        application_repo: Application repository port.
    """

    def __init__(
        self,
        application_repo: ApplicationRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._application_repo = application_repo
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, command: RegisterApplicationCommand) -> ApplicationResponse:
        """Register the application.

        Raises:
            ApplicationAlreadyExistsError: If the application is already registered.
        """
        application_id = command.application_id
        correlation_id = str(command.correlation_id)
        if self._application_repo.exists(application_id):
            raise ApplicationAlreadyExistsError(str(application_id), correlation_id)

        now = self._clock()
        application = Application(
            application_id=application_id,
            deployment_jobs=DeploymentJobs.empty(),
            created_at=now,
            updated_at=now,
        )
        try:
            self._application_repo.save(application)
        except OptimisticLockError as exc:
            # registered concurrently
            raise ApplicationAlreadyExistsError(str(application_id), correlation_id) from exc

        log_secure_info(
            "info",
            f"Registered application {application_id}",
            correlation_id,
            application_id=str(application_id),
        )
        return ApplicationResponse(
            application_id=str(application_id),
            version=application.version,
            created_at=now.isoformat(),
            correlation_id=correlation_id,
        )
