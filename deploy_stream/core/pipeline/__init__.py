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

"""Deployment pipeline domain module.

This module contains the job catalog, pipeline state and promotion gate.
"""

from deploy_stream.core.pipeline.catalog import JobClass, JobType
from deploy_stream.core.pipeline.entities import (
    Application,
    DeploymentJobs,
    JobCompletion,
    JobError,
    JobReport,
    JobRun,
    JobStatus,
    JobSuccess,
)
from deploy_stream.core.pipeline.exceptions import (
    ApplicationAlreadyExistsError,
    ApplicationNotFoundError,
    ConcurrentUpdateError,
    InvalidProjectIdError,
    OptimisticLockError,
    PipelineDomainError,
    UnknownStageError,
)
from deploy_stream.core.pipeline.job_list import JobList
from deploy_stream.core.pipeline.value_objects import (
    ApplicationChange,
    ApplicationId,
    ApplicationRevision,
    Change,
    Environment,
    IssueId,
    RegionName,
    SystemName,
    Version,
    VersionChange,
    Zone,
)

__all__ = [
    "JobClass",
    "JobType",
    "Application",
    "DeploymentJobs",
    "JobCompletion",
    "JobError",
    "JobReport",
    "JobRun",
    "JobStatus",
    "JobSuccess",
    "ApplicationAlreadyExistsError",
    "ApplicationNotFoundError",
    "ConcurrentUpdateError",
    "InvalidProjectIdError",
    "OptimisticLockError",
    "PipelineDomainError",
    "UnknownStageError",
    "JobList",
    "ApplicationChange",
    "ApplicationId",
    "ApplicationRevision",
    "Change",
    "Environment",
    "IssueId",
    "RegionName",
    "SystemName",
    "Version",
    "VersionChange",
    "Zone",
]
