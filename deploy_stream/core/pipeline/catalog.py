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

"""Catalog of the deployment jobs which exist in the build system.

The catalog is a static table of immutable ``JobType`` records plus pure
lookup functions over it. It never changes at runtime.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .exceptions import UnknownStageError
from .value_objects import Environment, RegionName, SystemName, Zone


class JobClass(str, Enum):
    """Position of a job in the deployment pipeline."""

    PREFLIGHT = "preflight"
    INTEGRATION_TEST = "integration-test"
    STAGING_TEST = "staging-test"
    PRODUCTION = "production"


_ENVIRONMENT_BY_CLASS: Dict[JobClass, Optional[Environment]] = {
    JobClass.PREFLIGHT: None,
    JobClass.INTEGRATION_TEST: Environment.TEST,
    JobClass.STAGING_TEST: Environment.STAGING,
    JobClass.PRODUCTION: Environment.PROD,
}


@dataclass(frozen=True)
class JobType:
    """A job in the build system.

    Attributes:
        job_name: Stable name used by the build system when reporting.
        job_class: Pipeline position of the job.
        zones: Zone this job deploys to, per system.
    """

    job_name: str
    job_class: JobClass
    zones: Mapping[SystemName, Zone] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @property
    def environment(self) -> Optional[Environment]:
        """Environment of this job, or None if it does not deploy anywhere."""
        return _ENVIRONMENT_BY_CLASS[self.job_class]

    @property
    def is_production(self) -> bool:
        """Whether this is a production job."""
        return self.environment == Environment.PROD

    def zone(self, system: SystemName) -> Optional[Zone]:
        """Return the zone of this job in the given system, if any."""
        return self.zones.get(system)

    def region(self, system: SystemName) -> Optional[RegionName]:
        """Return the region of this job in the given system, if any."""
        zone = self.zone(system)
        return zone.region if zone else None

    def __str__(self) -> str:
        """Return string representation."""
        return self.job_name


def _job(name: str, job_class: JobClass, *zones: Tuple[SystemName, str, str]) -> JobType:
    return JobType(
        job_name=name,
        job_class=job_class,
        zones=MappingProxyType(
            {system: Zone.of(environment, region) for system, environment, region in zones}
        ),
    )


_MAIN = SystemName.MAIN
_CD = SystemName.CD

COMPONENT = _job("component", JobClass.PREFLIGHT)
SYSTEM_TEST = _job(
    "system-test", JobClass.INTEGRATION_TEST,
    (_MAIN, "test", "us-east-1"), (_CD, "test", "cd-us-central-1"),
)
STAGING_TEST = _job(
    "staging-test", JobClass.STAGING_TEST,
    (_MAIN, "staging", "us-east-3"), (_CD, "staging", "cd-us-central-1"),
)
PRODUCTION_CORP_US_EAST_1 = _job(
    "production-corp-us-east-1", JobClass.PRODUCTION, (_MAIN, "prod", "corp-us-east-1")
)
PRODUCTION_US_EAST_3 = _job(
    "production-us-east-3", JobClass.PRODUCTION, (_MAIN, "prod", "us-east-3")
)
PRODUCTION_US_WEST_1 = _job(
    "production-us-west-1", JobClass.PRODUCTION, (_MAIN, "prod", "us-west-1")
)
PRODUCTION_US_CENTRAL_1 = _job(
    "production-us-central-1", JobClass.PRODUCTION, (_MAIN, "prod", "us-central-1")
)
PRODUCTION_AP_NORTHEAST_1 = _job(
    "production-ap-northeast-1", JobClass.PRODUCTION, (_MAIN, "prod", "ap-northeast-1")
)
PRODUCTION_AP_NORTHEAST_2 = _job(
    "production-ap-northeast-2", JobClass.PRODUCTION, (_MAIN, "prod", "ap-northeast-2")
)
PRODUCTION_AP_SOUTHEAST_1 = _job(
    "production-ap-southeast-1", JobClass.PRODUCTION, (_MAIN, "prod", "ap-southeast-1")
)
PRODUCTION_EU_WEST_1 = _job(
    "production-eu-west-1", JobClass.PRODUCTION, (_MAIN, "prod", "eu-west-1")
)
PRODUCTION_CD_US_CENTRAL_1 = _job(
    "production-cd-us-central-1", JobClass.PRODUCTION, (_CD, "prod", "cd-us-central-1")
)
PRODUCTION_CD_US_CENTRAL_2 = _job(
    "production-cd-us-central-2", JobClass.PRODUCTION, (_CD, "prod", "cd-us-central-2")
)

JOB_TYPES: Tuple[JobType, ...] = (
    COMPONENT,
    SYSTEM_TEST,
    STAGING_TEST,
    PRODUCTION_CORP_US_EAST_1,
    PRODUCTION_US_EAST_3,
    PRODUCTION_US_WEST_1,
    PRODUCTION_US_CENTRAL_1,
    PRODUCTION_AP_NORTHEAST_1,
    PRODUCTION_AP_NORTHEAST_2,
    PRODUCTION_AP_SOUTHEAST_1,
    PRODUCTION_EU_WEST_1,
    PRODUCTION_CD_US_CENTRAL_1,
    PRODUCTION_CD_US_CENTRAL_2,
)

_BY_NAME: Mapping[str, JobType] = MappingProxyType({job.job_name: job for job in JOB_TYPES})
_ORDER: Mapping[JobType, int] = MappingProxyType(
    {job: index for index, job in enumerate(JOB_TYPES)}
)


def check_catalog(job_types: Tuple[JobType, ...]) -> None:
    """Verify the structural invariants of a job catalog.

    Raises:
        ValueError: If names repeat, the test jobs are not singletons,
            or two production jobs share a zone in some system.
    """
    names = [job.job_name for job in job_types]
    if len(set(names)) != len(names):
        raise ValueError("Job names must be unique")
    for job_class in (JobClass.INTEGRATION_TEST, JobClass.STAGING_TEST):
        count = sum(1 for job in job_types if job.job_class == job_class)
        if count != 1:
            raise ValueError(f"Expected exactly one {job_class.value} job, found {count}")
    for system in SystemName:
        zones = [job.zone(system) for job in job_types if job.is_production and job.zone(system)]
        if len(set(zones)) != len(zones):
            raise ValueError(f"Production jobs must have distinct zones in system {system.value}")


check_catalog(JOB_TYPES)


def catalog_order(job_type: JobType) -> int:
    """Position of a job in the catalog; jobs no longer in it sort last."""
    return _ORDER.get(job_type, len(JOB_TYPES))


def job_types_for(system: SystemName) -> Tuple[JobType, ...]:
    """Return the jobs which run in the given system, in pipeline order."""
    return tuple(
        job for job in JOB_TYPES
        if job.job_class == JobClass.PREFLIGHT or job.zone(system) is not None
    )


def from_job_name(job_name: str) -> JobType:
    """Return the job with the given build system name.

    Raises:
        UnknownStageError: If no job has this name.
    """
    job_type = _BY_NAME.get(job_name)
    if job_type is None:
        raise UnknownStageError(job_name)
    return job_type


def from_zone(system: SystemName, zone: Zone) -> Optional[JobType]:
    """Return the job deploying to the given zone in the given system, if any."""
    for job in JOB_TYPES:
        if job.zone(system) == zone:
            return job
    return None


def from_environment_region(
    system: SystemName,
    environment: Environment,
    region: RegionName,
) -> Optional[JobType]:
    """Return the job for the given environment and region, if any.

    The test and staging environments have a single job each, so the
    region is ignored for those.
    """
    if environment == Environment.TEST:
        return SYSTEM_TEST
    if environment == Environment.STAGING:
        return STAGING_TEST
    return from_zone(system, Zone(environment, region))
