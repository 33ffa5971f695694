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

"""Value objects for the deployment pipeline domain.

All value objects are immutable and defined by their values, not identity.
Changes and versions are only ever compared for equality.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class Environment(str, Enum):
    """Deployment environment a zone belongs to."""

    TEST = "test"
    STAGING = "staging"
    PROD = "prod"
    DEV = "dev"
    PERF = "perf"

    @classmethod
    def from_name(cls, name: str) -> "Environment":
        """Return the environment with the given name.

        Raises:
            ValueError: If no environment has this name.
        """
        try:
            return cls(name)
        except ValueError as exc:
            raise ValueError(f"Unknown environment: {name}") from exc


class SystemName(str, Enum):
    """Deployment fleet which may bind a job to its own zone."""

    MAIN = "main"
    CD = "cd"

    @classmethod
    def from_name(cls, name: str) -> "SystemName":
        """Return the system with the given name.

        Raises:
            ValueError: If no system has this name.
        """
        try:
            return cls(name)
        except ValueError as exc:
            raise ValueError(f"Unknown system: {name}") from exc


@dataclass(frozen=True)
class RegionName:
    """Name of a region, e.g. ``us-east-1``.

    Raises:
        ValueError: If the region name is empty or malformed.
    """

    value: str

    REGION_PATTERN: ClassVar[str] = r"^[a-z0-9][a-z0-9-]*$"

    def __post_init__(self) -> None:
        """Validate region name format."""
        if not self.value or not self.value.strip():
            raise ValueError("Region name cannot be empty")
        if not re.match(self.REGION_PATTERN, self.value):
            raise ValueError(f"Invalid region name: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class Zone:
    """A concrete deployable location: an environment in a region."""

    environment: Environment
    region: RegionName

    @classmethod
    def of(cls, environment: str, region: str) -> "Zone":
        """Create a zone from plain names."""
        return cls(Environment.from_name(environment), RegionName(region))

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.environment.value}.{self.region}"


@dataclass(frozen=True)
class Version:
    """Platform version, e.g. ``6.142.7``.

    Attributes:
        value: Dotted version string with an optional qualifier.

    Raises:
        ValueError: If the version string is malformed.
    """

    value: str

    VERSION_PATTERN: ClassVar[str] = r"^\d+(\.\d+){0,2}(\.[A-Za-z0-9_-]+)?$"

    def __post_init__(self) -> None:
        """Validate version format."""
        if not self.value or not re.match(self.VERSION_PATTERN, self.value):
            raise ValueError(f"Invalid version: {self.value!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ApplicationRevision:
    """A revision of an application package.

    Two revisions are the same revision when their package hashes match;
    the source commit is informational only.

    Attributes:
        package_hash: Hash of the application package.
        source_commit: Optional commit the package was built from.
    """

    package_hash: str
    source_commit: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate package hash."""
        if not self.package_hash or not self.package_hash.strip():
            raise ValueError("Application package hash cannot be empty")

    def __str__(self) -> str:
        """Return string representation."""
        if self.source_commit:
            return f"{self.package_hash} ({self.source_commit})"
        return self.package_hash


class Change:
    """A change which is being rolled out: a platform upgrade or an application revision."""


@dataclass(frozen=True)
class VersionChange(Change):
    """Rollout of a new platform version."""

    version: Version

    def __str__(self) -> str:
        """Return string representation."""
        return f"upgrade to {self.version}"


@dataclass(frozen=True)
class ApplicationChange(Change):
    """Rollout of an application revision.

    The revision is absent when the change was submitted without one being known yet.
    """

    revision: Optional[ApplicationRevision] = None

    def __str__(self) -> str:
        """Return string representation."""
        if self.revision is None:
            return "application change to an unknown revision"
        return f"application change to {self.revision}"


@dataclass(frozen=True)
class ApplicationId:
    """Identifier of an application instance: ``tenant:application:instance``.

    Raises:
        ValueError: If any part is empty or malformed.
    """

    tenant: str
    application: str
    instance: str = "default"

    PART_PATTERN: ClassVar[str] = r"^[a-zA-Z0-9_-]+$"

    def __post_init__(self) -> None:
        """Validate each id part."""
        for name, part in (
            ("tenant", self.tenant),
            ("application", self.application),
            ("instance", self.instance),
        ):
            if not part or not re.match(self.PART_PATTERN, part):
                raise ValueError(f"Invalid {name} name: {part!r}")

    @classmethod
    def from_serialized(cls, value: str) -> "ApplicationId":
        """Parse ``tenant:application:instance``.

        Raises:
            ValueError: If the value does not have exactly three parts.
        """
        parts = value.split(":")
        if len(parts) != 3:
            raise ValueError(
                f"Application id must be 'tenant:application:instance', got: {value!r}"
            )
        return cls(*parts)

    def serialized_form(self) -> str:
        """Return ``tenant:application:instance``."""
        return f"{self.tenant}:{self.application}:{self.instance}"

    def __str__(self) -> str:
        """Return string representation."""
        return self.serialized_form()


@dataclass(frozen=True)
class IssueId:
    """Opaque identifier of an issue in the issue tracker."""

    value: str

    MAX_LENGTH: ClassVar[int] = 255

    def __post_init__(self) -> None:
        """Validate issue id."""
        if not self.value or not self.value.strip():
            raise ValueError("Issue id cannot be empty")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"Issue id length cannot exceed {self.MAX_LENGTH} characters"
            )

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class CorrelationId:
    """Request tracing identifier.

    Raises:
        ValueError: If the correlation id is empty or too long.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 128

    def __post_init__(self) -> None:
        """Validate correlation id."""
        if not self.value or not self.value.strip():
            raise ValueError("Correlation id cannot be empty")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"Correlation id length cannot exceed {self.MAX_LENGTH} characters"
            )

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
