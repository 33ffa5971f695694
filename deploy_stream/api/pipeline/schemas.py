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

"""Pydantic schemas for Pipeline API requests and responses."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RegisterApplicationRequest(BaseModel):
    """Request model for registering an application."""

    tenant: str = Field(..., min_length=1, max_length=64, description="Tenant name")
    application: str = Field(..., min_length=1, max_length=64, description="Application name")
    instance: str = Field(default="default", min_length=1, max_length=64, description="Instance name")


class ApplicationResponse(BaseModel):
    """Response model for a registered application."""

    application_id: str = Field(..., description="Application id (tenant:application:instance)")
    version: int = Field(..., description="Record version")
    created_at: str = Field(..., description="Registration timestamp (ISO 8601)")
    correlation_id: str = Field(..., description="Correlation identifier")


class JobReportRequest(BaseModel):
    """Completion report sent by the build system."""

    job_name: str = Field(..., min_length=1, description="Build system job name")
    project_id: int = Field(..., description="Build system project id")
    build_number: int = Field(..., ge=0, description="Build counter of the completed run")
    job_error: Optional[Literal["unknown", "outOfCapacity"]] = Field(
        default=None, description="Failure kind, absent on success"
    )


class TriggerJobRequest(BaseModel):
    """Request model for recording a job triggering."""

    change_type: Optional[Literal["version", "application"]] = Field(
        default=None, description="Kind of change being rolled out, if any"
    )
    version: str = Field(..., min_length=1, description="Platform version to run with")
    revision: Optional[str] = Field(default=None, description="Application package hash")
    source_commit: Optional[str] = Field(default=None, description="Source commit of the revision")
    reason: str = Field(..., min_length=1, max_length=1024, description="Why the job was triggered")


class AssignProjectIdRequest(BaseModel):
    """Request model for setting the build system project id."""

    project_id: int = Field(..., description="Build system project id")


class LinkIssueRequest(BaseModel):
    """Request model for linking an issue; null unlinks."""

    issue_id: Optional[str] = Field(default=None, max_length=255, description="Issue id")


class JobRunResponse(BaseModel):
    """A triggering of a job."""

    version: str
    revision: Optional[str] = None
    source_commit: Optional[str] = None
    is_version_change: bool
    reason: str
    at: str


class JobCompletionResponse(BaseModel):
    """A completion of a job."""

    build_number: int
    job_error: Optional[str] = None
    notified_at: str
    recorded_at: str


class JobStatusResponse(BaseModel):
    """Status of a single job."""

    job_name: str
    environment: Optional[str] = None
    zone: Optional[str] = None
    running: bool
    failing: bool
    out_of_capacity: bool = False
    last_triggered: Optional[JobRunResponse] = None
    last_completed: Optional[JobCompletionResponse] = None
    last_success: Optional[JobCompletionResponse] = None
    last_success_run: Optional[JobRunResponse] = None
    first_failing: Optional[JobCompletionResponse] = None


class PipelineStatusResponse(BaseModel):
    """Pipeline state of an application."""

    application_id: str
    version: int
    project_id: Optional[int] = None
    issue_id: Optional[str] = None
    has_failures: bool
    is_running: bool
    jobs: List[JobStatusResponse] = Field(default_factory=list)
    correlation_id: str


class DeployabilityResponse(BaseModel):
    """Promotion gate answer."""

    application_id: str
    environment: Optional[str] = None
    change: Optional[str] = None
    deployable: bool
    required_job: Optional[str] = None
    correlation_id: str


class JobTypeResponse(BaseModel):
    """A job of the catalog."""

    job_name: str
    job_class: str
    environment: Optional[str] = None
    zone: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    correlation_id: str = Field(..., description="Request correlation ID")
    timestamp: str = Field(..., description="Error timestamp (ISO 8601)")
