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

"""Commands which record facts about an application's pipeline."""

from dataclasses import dataclass
from typing import Optional

from deploy_stream.core.pipeline.value_objects import (
    ApplicationId,
    ApplicationRevision,
    Change,
    CorrelationId,
    IssueId,
    Version,
)


@dataclass(frozen=True)
class RegisterApplicationCommand:
    """Command to register an application with an empty pipeline."""

    application_id: ApplicationId
    correlation_id: CorrelationId


@dataclass(frozen=True)
class RecordJobCompletionCommand:
    """Command to record a completion report from the build system.

    Attributes:
        application_id: Application the job ran for.
        job_name: Build system name of the job.
        project_id: Build system project id.
        build_number: Build counter of the completed run.
        job_error: Failure kind name, or None on success.
        correlation_id: Request correlation identifier for tracing.
    """

    application_id: ApplicationId
    job_name: str
    project_id: int
    build_number: int
    job_error: Optional[str]
    correlation_id: CorrelationId


@dataclass(frozen=True)
class RecordJobTriggeringCommand:
    """Command to record that a job was dispatched to the build system.

    Attributes:
        application_id: Application the job is triggered for.
        job_name: Build system name of the job.
        change: Change being rolled out, if any.
        version: Platform version the job runs with.
        revision: Application revision the job runs with, if known.
        reason: Why the job was triggered.
        correlation_id: Request correlation identifier for tracing.
    """

    application_id: ApplicationId
    job_name: str
    change: Optional[Change]
    version: Version
    revision: Optional[ApplicationRevision]
    reason: str
    correlation_id: CorrelationId


@dataclass(frozen=True)
class RemoveJobCommand:
    """Command to forget all status of a job, e.g. when it is decommissioned."""

    application_id: ApplicationId
    job_name: str
    correlation_id: CorrelationId


@dataclass(frozen=True)
class AssignProjectIdCommand:
    """Command to set the build system project id of an application."""

    application_id: ApplicationId
    project_id: int
    correlation_id: CorrelationId


@dataclass(frozen=True)
class LinkIssueCommand:
    """Command to link an application's pipeline to an issue, or unlink it with None."""

    application_id: ApplicationId
    issue_id: Optional[IssueId]
    correlation_id: CorrelationId
