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

"""Promotion gate: whether a change may move on to the next environment.

A change may enter staging once the system test has succeeded for that
very change, and production once the staging test has. A success for any
other change does not count.
"""

from typing import TYPE_CHECKING, Mapping, Optional

from .catalog import STAGING_TEST, SYSTEM_TEST, JobType
from .value_objects import Change, Environment

if TYPE_CHECKING:
    from .entities import JobStatus


def upstream_job(environment: Optional[Environment]) -> Optional[JobType]:
    """Return the job which must succeed before deploying to the environment, if any."""
    if environment == Environment.STAGING:
        return SYSTEM_TEST
    if environment == Environment.PROD:
        return STAGING_TEST
    return None


def is_successful(
    job_status: Mapping[JobType, "JobStatus"],
    change: Change,
    job_type: JobType,
) -> bool:
    """Returns whether the job's last success was for the given change."""
    status = job_status.get(job_type)
    if status is None or status.last_success is None:
        return False
    return status.last_success.was_for(change)


def is_deployable_to(
    job_status: Mapping[JobType, "JobStatus"],
    environment: Optional[Environment],
    change: Optional[Change],
) -> bool:
    """Returns whether the change can be deployed to the given environment.

    Without an environment or a change there is nothing to gate.
    """
    if environment is None or change is None:
        return True
    required = upstream_job(environment)
    if required is None:
        return True  # other environments do not have any preconditions
    return is_successful(job_status, change, required)
