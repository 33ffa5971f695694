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

"""Domain entities for the deployment pipeline module.

Everything here is immutable. Updates return new instances built from the
old one plus the changed parts.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from . import gate
from .catalog import JobType, catalog_order
from .exceptions import InvalidProjectIdError
from .job_list import JobList
from .value_objects import (
    ApplicationChange,
    ApplicationId,
    ApplicationRevision,
    Change,
    Environment,
    IssueId,
    Version,
    VersionChange,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobError(str, Enum):
    """Kinds of job failure reported by the build system."""

    UNKNOWN = "unknown"
    OUT_OF_CAPACITY = "outOfCapacity"


@dataclass(frozen=True)
class JobReport:
    """A completion report for a job, as sent by the build system.

    Attributes:
        application_id: Application the job ran for.
        job_type: The job which completed.
        project_id: Build system project running the application's jobs.
        build_number: Build counter of the run, increasing per job and project.
        job_error: Failure kind, or None if the job succeeded.
    """

    application_id: ApplicationId
    job_type: JobType
    project_id: int
    build_number: int
    job_error: Optional[JobError] = None

    @property
    def success(self) -> bool:
        """Whether the job succeeded."""
        return self.job_error is None


@dataclass(frozen=True)
class JobRun:
    """A triggering of a job.

    Attributes:
        version: Platform version the job was triggered with.
        revision: Application revision the job was triggered with, if known.
        is_version_change: Whether the triggering was for a platform upgrade.
        reason: Why the job was triggered.
        at: When the job was triggered.
    """

    version: Version
    revision: Optional[ApplicationRevision]
    is_version_change: bool
    reason: str
    at: datetime

    def was_for(self, change: Change) -> bool:
        """Returns whether this run was for the given change."""
        if isinstance(change, VersionChange):
            return self.version == change.version
        if isinstance(change, ApplicationChange):
            return change.revision is not None and self.revision == change.revision
        return False


@dataclass(frozen=True)
class JobCompletion:
    """A completion of a job, as resolved from a report.

    Attributes:
        build_number: Build counter of the completed run.
        job_error: Failure kind, or None on success.
        notified_at: When the build system reported the completion.
        recorded_at: When the completion was resolved by this service.
    """

    build_number: int
    job_error: Optional[JobError]
    notified_at: datetime
    recorded_at: datetime

    @property
    def success(self) -> bool:
        """Whether this completion was a success."""
        return self.job_error is None


@dataclass(frozen=True)
class JobSuccess:
    """The most recent successful completion of a job and the run it completed.

    ``run`` is None when the build system reported success for a job
    this service never triggered, so there is no change to compare with.
    """

    completion: JobCompletion
    run: Optional[JobRun] = None

    def was_for(self, change: Change) -> bool:
        """Returns whether this success was for the given change."""
        return self.run is not None and self.run.was_for(change)


@dataclass(frozen=True)
class JobStatus:
    """The status of a single job of an application.

    Attributes:
        job_type: The job this is the status of.
        last_triggered: The most recent triggering, if any.
        last_completed: The most recent completion, if any.
        last_success: The most recent successful completion, if any.
        first_failing: First failing completion of the ongoing failure streak, if failing.
    """

    job_type: JobType
    last_triggered: Optional[JobRun] = None
    last_completed: Optional[JobCompletion] = None
    last_success: Optional[JobSuccess] = None
    first_failing: Optional[JobCompletion] = None

    @classmethod
    def initial(cls, job_type: JobType) -> "JobStatus":
        """Status of a job which has neither been triggered nor completed."""
        return cls(job_type=job_type)

    def with_triggering(
        self,
        version: Version,
        revision: Optional[ApplicationRevision],
        is_version_change: bool,
        reason: str,
        trigger_time: datetime,
    ) -> "JobStatus":
        """Return a copy where the given triggering replaces the last one."""
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        run = JobRun(
            version=version,
            revision=revision,
            is_version_change=is_version_change,
            reason=reason,
            at=trigger_time,
        )
        return replace(self, last_triggered=run)

    def with_completion(self, completion: JobCompletion) -> "JobStatus":
        """Return a copy with the given completion recorded.

        A success becomes the last success, tied to the current triggering.
        A failure never clears the last success.
        """
        if completion.success:
            return replace(
                self,
                last_completed=completion,
                last_success=JobSuccess(completion=completion, run=self.last_triggered),
                first_failing=None,
            )
        first_failing = self.first_failing if self.is_failing else completion
        return replace(self, last_completed=completion, first_failing=first_failing)

    @property
    def is_failing(self) -> bool:
        """Whether the last completion of this job was a failure."""
        return self.last_completed is not None and not self.last_completed.success

    @property
    def is_out_of_capacity(self) -> bool:
        """Whether the last completion failed because the zone was out of capacity."""
        return (
            self.last_completed is not None
            and self.last_completed.job_error == JobError.OUT_OF_CAPACITY
        )

    def is_running(self, timeout_limit: datetime) -> bool:
        """Whether this job was triggered after timeout_limit and has not completed since."""
        if self.last_triggered is None:
            return False
        if self.last_triggered.at <= timeout_limit:
            return False
        if self.last_completed is None:
            return True
        return self.last_triggered.at > self.last_completed.notified_at


@dataclass(frozen=True)
class DeploymentJobs:
    """Which deployment jobs an application has run and their current status.

    This is immutable: every ``with_*`` method returns a new instance.

    Attributes:
        project_id: Id of the build system project running these jobs, or None
            until the jobs have reported back at least once.
        job_status: Read-only mapping from job to status, in catalog order.
        issue_id: Issue filed for this application's deployment, if any.

    Raises:
        InvalidProjectIdError: If project_id is present but not positive.
    """

    project_id: Optional[int] = None
    job_status: Mapping[JobType, JobStatus] = field(default_factory=dict)
    issue_id: Optional[IssueId] = None

    def __post_init__(self) -> None:
        """Validate project id and freeze the status mapping."""
        if self.project_id is not None and (
            isinstance(self.project_id, bool)
            or not isinstance(self.project_id, int)
            or self.project_id <= 0
        ):
            raise InvalidProjectIdError(self.project_id)
        ordered = sorted(self.job_status.values(), key=lambda s: catalog_order(s.job_type))
        object.__setattr__(
            self, "job_status", MappingProxyType({s.job_type: s for s in ordered})
        )

    @classmethod
    def empty(cls) -> "DeploymentJobs":
        """Jobs of a newly registered application: nothing has run."""
        return cls()

    @classmethod
    def of(
        cls,
        project_id: Optional[int],
        statuses: Iterable[JobStatus],
        issue_id: Optional[IssueId] = None,
    ) -> "DeploymentJobs":
        """Create an instance from a collection of job statuses."""
        return cls(
            project_id=project_id,
            job_status={status.job_type: status for status in statuses},
            issue_id=issue_id,
        )

    def _status_or_initial(self, job_type: JobType) -> JobStatus:
        return self.job_status.get(job_type) or JobStatus.initial(job_type)

    def _with_status(self, status: JobStatus, project_id: Optional[int]) -> "DeploymentJobs":
        updated = dict(self.job_status)
        updated[status.job_type] = status
        return DeploymentJobs(project_id=project_id, job_status=updated, issue_id=self.issue_id)

    def with_completion(
        self,
        report: JobReport,
        notification_time: datetime,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "DeploymentJobs":
        """Return a new instance with the given completion report recorded.

        Reports for jobs never triggered are accepted. The project id is
        always taken from the report. A report whose build number is lower
        than the one already recorded for the same project is out of date,
        and is ignored.
        """
        current = self._status_or_initial(report.job_type)
        last = current.last_completed
        if (
            last is not None
            and report.project_id == self.project_id
            and report.build_number < last.build_number
        ):
            logger.info(
                "Ignoring out-of-order report for %s: build %d is older than recorded build %d",
                report.job_type,
                report.build_number,
                last.build_number,
            )
            return self

        completion = JobCompletion(
            build_number=report.build_number,
            job_error=report.job_error,
            notified_at=notification_time,
            recorded_at=(clock or _utc_now)(),
        )
        return self._with_status(current.with_completion(completion), report.project_id)

    def with_triggering(
        self,
        job_type: JobType,
        change: Optional[Change],
        version: Version,
        revision: Optional[ApplicationRevision],
        reason: str,
        trigger_time: datetime,
    ) -> "DeploymentJobs":
        """Return a new instance with the given triggering recorded.

        Re-triggering a job which is already running is always allowed.
        """
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        status = self._status_or_initial(job_type).with_triggering(
            version=version,
            revision=revision,
            is_version_change=isinstance(change, VersionChange),
            reason=reason,
            trigger_time=trigger_time,
        )
        return self._with_status(status, self.project_id)

    def with_project_id(self, project_id: int) -> "DeploymentJobs":
        """Return a new instance with the given project id."""
        return replace(self, project_id=project_id)

    def with_issue_id(self, issue_id: Optional[IssueId]) -> "DeploymentJobs":
        """Return a new instance linked to the given issue, or to none."""
        return replace(self, issue_id=issue_id)

    def without(self, job_type: JobType) -> "DeploymentJobs":
        """Return a new instance where the given job has never run."""
        remaining = {t: s for t, s in self.job_status.items() if t != job_type}
        return replace(self, job_status=remaining)

    def jobs(self) -> JobList:
        """Return the statuses of this as a list which can be filtered."""
        return JobList.of(self.job_status.values())

    def has_failures(self) -> bool:
        """Returns whether the last completion of some job was a failure."""
        return self.jobs().failing().any_match()

    def is_running(self, timeout_limit: datetime, job_type: Optional[JobType] = None) -> bool:
        """Returns whether a job is running, having been started after timeout_limit.

        Considers only the given job if one is given, otherwise any job.
        """
        if job_type is None:
            return self.jobs().running(timeout_limit).any_match()
        status = self.job_status.get(job_type)
        return status is not None and status.is_running(timeout_limit)

    def is_deployable_to(
        self,
        environment: Optional[Environment],
        change: Optional[Change],
    ) -> bool:
        """Returns whether the change can be deployed to the given environment."""
        return gate.is_deployable_to(self.job_status, environment, change)

    def is_successful(self, change: Change, job_type: JobType) -> bool:
        """Returns whether the job has completed successfully for the change."""
        return gate.is_successful(self.job_status, change, job_type)


@dataclass(frozen=True)
class Application:
    """An application registered for deployment, owning its pipeline state.

    Attributes:
        application_id: Application identifier.
        deployment_jobs: Current pipeline snapshot.
        version: Optimistic locking version, incremented on every update.
        created_at: Registration timestamp.
        updated_at: Last update timestamp.
    """

    application_id: ApplicationId
    deployment_jobs: DeploymentJobs = field(default_factory=DeploymentJobs.empty)
    version: int = 1
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def with_deployment_jobs(
        self,
        deployment_jobs: DeploymentJobs,
        updated_at: Optional[datetime] = None,
    ) -> "Application":
        """Return the next version of this with the given snapshot."""
        return replace(
            self,
            deployment_jobs=deployment_jobs,
            version=self.version + 1,
            updated_at=updated_at or _utc_now(),
        )
