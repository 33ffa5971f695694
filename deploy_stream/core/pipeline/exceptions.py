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

"""Domain exceptions for the deployment pipeline module."""

from typing import Optional


class PipelineDomainError(Exception):
    """Base exception for all pipeline domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class InvalidProjectIdError(PipelineDomainError):
    """Build system project id is not a positive integer."""

    def __init__(self, project_id: object, correlation_id: Optional[str] = None) -> None:
        """Initialize invalid project id error.

        Args:
            project_id: The rejected project id.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"projectId must be a positive integer, got {project_id!r}",
            correlation_id=correlation_id,
        )
        self.project_id = project_id


class UnknownStageError(PipelineDomainError):
    """No job in the catalog has the given name."""

    def __init__(self, job_name: str, correlation_id: Optional[str] = None) -> None:
        """Initialize unknown stage error.

        Args:
            job_name: The job name which did not resolve.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(f"Unknown job name '{job_name}'", correlation_id=correlation_id)
        self.job_name = job_name


class ApplicationNotFoundError(PipelineDomainError):
    """Application is not registered."""

    def __init__(self, application_id: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(
            f"Application not found: {application_id}",
            correlation_id=correlation_id,
        )
        self.application_id = application_id


class ApplicationAlreadyExistsError(PipelineDomainError):
    """Application is already registered."""

    def __init__(self, application_id: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(
            f"Application already exists: {application_id}",
            correlation_id=correlation_id,
        )
        self.application_id = application_id


class OptimisticLockError(PipelineDomainError):
    """Stored record was modified concurrently."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        expected_version: int,
        actual_version: int,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize optimistic lock error.

        Args:
            entity_type: Kind of record that conflicted.
            entity_id: Identifier of the record.
            expected_version: Version the writer read.
            actual_version: Version found in the store.
            correlation_id: Optional correlation ID for tracing.
        """
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        super().__init__(
            f"Version conflict on {entity_type} {entity_id}: "
            f"expected {expected_version}, found {actual_version}",
            correlation_id=correlation_id,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class ConcurrentUpdateError(PipelineDomainError):
    """Update kept conflicting with concurrent writers and was given up."""

    def __init__(
        self,
        application_id: str,
        attempts: int,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize concurrent update error.

        Args:
            application_id: Application whose record could not be updated.
            attempts: Number of read-compute-write attempts made.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Giving up updating {application_id} after {attempts} conflicting attempts",
            correlation_id=correlation_id,
        )
        self.application_id = application_id
        self.attempts = attempts
