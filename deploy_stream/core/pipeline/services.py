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

"""Domain services for the deployment pipeline module."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from deploy_stream.common.logging_utils import log_secure_info

from .entities import Application, DeploymentJobs
from .exceptions import (
    ApplicationNotFoundError,
    ConcurrentUpdateError,
    OptimisticLockError,
)
from .repositories import ApplicationRepository
from .value_objects import ApplicationId

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class ApplicationUpdateService:
    """Applies pure snapshot updates to stored applications.

    Concurrent writers are serialized with optimistic locking: the record is
    read, the new snapshot computed, and the result saved only if nobody
    saved in between. On conflict the whole cycle is retried.
    """

    def __init__(
        self,
        application_repo: ApplicationRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize update service.

        Args:
            application_repo: Application repository implementation.
            max_attempts: Read-compute-write cycles to try before giving up.
            clock: Source of the current time, defaults to UTC now.

        Raises:
            ValueError: If max_attempts is not positive.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self._application_repo = application_repo
        self._max_attempts = max_attempts
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self) -> datetime:
        """Return the current time of this service's clock."""
        return self._clock()

    def update(
        self,
        application_id: ApplicationId,
        change: Callable[[DeploymentJobs], DeploymentJobs],
        correlation_id: str = "",
    ) -> Application:
        """Replace the application's snapshot with change(snapshot).

        ``change`` may be called once per attempt, so it must be pure.

        Args:
            application_id: Application to update.
            change: Function computing the new snapshot from the current one.
            correlation_id: Request correlation ID for tracing.

        Returns:
            The stored application record after the update.

        Raises:
            ApplicationNotFoundError: If the application is not registered.
            ConcurrentUpdateError: If every attempt conflicted.
        """
        for attempt in range(1, self._max_attempts + 1):
            application = self._application_repo.find_by_id(application_id)
            if application is None:
                raise ApplicationNotFoundError(
                    str(application_id), correlation_id=correlation_id or None
                )

            updated_jobs = change(application.deployment_jobs)
            if updated_jobs == application.deployment_jobs:
                return application

            updated = application.with_deployment_jobs(updated_jobs, updated_at=self._clock())
            try:
                self._application_repo.save(updated)
                return updated
            except OptimisticLockError:
                logger.debug(
                    "Conflict updating %s on attempt %d of %d, correlation_id=%s",
                    application_id,
                    attempt,
                    self._max_attempts,
                    correlation_id,
                )

        log_secure_info(
            "warning",
            f"Giving up updating {application_id} after {self._max_attempts} attempts",
            correlation_id,
            application_id=str(application_id),
        )
        raise ConcurrentUpdateError(
            str(application_id),
            self._max_attempts,
            correlation_id=correlation_id or None,
        )
