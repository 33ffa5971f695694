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

"""Pipeline response DTOs.

Immutable data transfer objects for returning pipeline state to the API layer.
Timestamps are ISO 8601 strings.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from deploy_stream.core.pipeline.catalog import JobType
from deploy_stream.core.pipeline.entities import (
    Application,
    JobCompletion,
    JobRun,
    JobStatus,
)
from deploy_stream.core.pipeline.value_objects import SystemName


@dataclass(frozen=True)
class ApplicationResponse:
    """Response DTO for a registered application."""

    application_id: str
    version: int
    created_at: str
    correlation_id: str


@dataclass(frozen=True)
class JobRunView:
    """A triggering of a job."""

    version: str
    revision: Optional[str]
    source_commit: Optional[str]
    is_version_change: bool
    reason: str
    at: str

    @classmethod
    def from_run(cls, run: Optional[JobRun]) -> Optional["JobRunView"]:
        """Build a view of the run, or None if there is none."""
        if run is None:
            return None
        return cls(
            version=str(run.version),
            revision=run.revision.package_hash if run.revision else None,
            source_commit=run.revision.source_commit if run.revision else None,
            is_version_change=run.is_version_change,
            reason=run.reason,
            at=run.at.isoformat(),
        )


@dataclass(frozen=True)
class JobCompletionView:
    """A completion of a job."""

    build_number: int
    job_error: Optional[str]
    notified_at: str
    recorded_at: str

    @classmethod
    def from_completion(cls, completion: Optional[JobCompletion]) -> Optional["JobCompletionView"]:
        """Build a view of the completion, or None if there is none."""
        if completion is None:
            return None
        return cls(
            build_number=completion.build_number,
            job_error=completion.job_error.value if completion.job_error else None,
            notified_at=completion.notified_at.isoformat(),
            recorded_at=completion.recorded_at.isoformat(),
        )


@dataclass(frozen=True)
class JobStatusView:
    """Status of a single job.

    ``last_success_run`` is None when the last success was reported for
    a run this service never triggered.
    """

    job_name: str
    environment: Optional[str]
    zone: Optional[str]
    running: bool
    failing: bool
    out_of_capacity: bool
    last_triggered: Optional[JobRunView]
    last_completed: Optional[JobCompletionView]
    last_success: Optional[JobCompletionView]
    last_success_run: Optional[JobRunView]
    first_failing: Optional[JobCompletionView]

    @classmethod
    def from_status(
        cls,
        status: JobStatus,
        system: SystemName,
        timeout_limit: datetime,
    ) -> "JobStatusView":
        """Build a view of the job status."""
        job_type: JobType = status.job_type
        zone = job_type.zone(system)
        last_success = status.last_success
        return cls(
            job_name=job_type.job_name,
            environment=job_type.environment.value if job_type.environment else None,
            zone=str(zone) if zone else None,
            running=status.is_running(timeout_limit),
            failing=status.is_failing,
            out_of_capacity=status.is_out_of_capacity,
            last_triggered=JobRunView.from_run(status.last_triggered),
            last_completed=JobCompletionView.from_completion(status.last_completed),
            last_success=JobCompletionView.from_completion(
                last_success.completion if last_success else None
            ),
            last_success_run=JobRunView.from_run(last_success.run if last_success else None),
            first_failing=JobCompletionView.from_completion(status.first_failing),
        )


@dataclass(frozen=True)
class PipelineStatusResponse:
    """Response DTO for the pipeline state of an application."""

    application_id: str
    version: int
    project_id: Optional[int]
    issue_id: Optional[str]
    has_failures: bool
    is_running: bool
    jobs: List[JobStatusView]
    correlation_id: str

    @classmethod
    def from_application(
        cls,
        application: Application,
        system: SystemName,
        timeout_limit: datetime,
        correlation_id: str,
    ) -> "PipelineStatusResponse":
        """Build the pipeline status of the application."""
        jobs = application.deployment_jobs
        return cls(
            application_id=str(application.application_id),
            version=application.version,
            project_id=jobs.project_id,
            issue_id=str(jobs.issue_id) if jobs.issue_id else None,
            has_failures=jobs.has_failures(),
            is_running=jobs.is_running(timeout_limit),
            jobs=[
                JobStatusView.from_status(status, system, timeout_limit)
                for status in jobs.job_status.values()
            ],
            correlation_id=correlation_id,
        )


@dataclass(frozen=True)
class DeployabilityResponse:
    """Response DTO for a promotion gate query.

    Attributes:
        application_id: Application checked.
        environment: Target environment, if any.
        change: Description of the change, if any.
        deployable: Whether the change may be deployed to the environment.
        required_job: Job which must have succeeded for the change, if any.
        correlation_id: Request correlation identifier.
    """

    application_id: str
    environment: Optional[str]
    change: Optional[str]
    deployable: bool
    required_job: Optional[str]
    correlation_id: str


@dataclass(frozen=True)
class JobTypeView:
    """A job of the catalog, as seen from one system."""

    job_name: str
    job_class: str
    environment: Optional[str]
    zone: Optional[str]

    @classmethod
    def from_job_type(cls, job_type: JobType, system: SystemName) -> "JobTypeView":
        """Build a view of the job type in the given system."""
        zone = job_type.zone(system)
        return cls(
            job_name=job_type.job_name,
            job_class=job_type.job_class.value,
            environment=job_type.environment.value if job_type.environment else None,
            zone=str(zone) if zone else None,
        )
