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

"""Shared pytest fixtures for Deploy Stream tests."""

# pylint: disable=redefined-outer-name

from datetime import datetime, timedelta, timezone

import pytest

from deploy_stream.core.pipeline.value_objects import (
    ApplicationId,
    ApplicationRevision,
    Version,
)


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by the given timedelta arguments."""
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def start_time() -> datetime:
    """Fixed reference time for tests."""
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(start_time) -> FakeClock:
    """Clock starting at start_time."""
    return FakeClock(start_time)


@pytest.fixture
def application_id() -> ApplicationId:
    """Application used across tests."""
    return ApplicationId("tenant1", "app1", "default")


@pytest.fixture
def version_a() -> Version:
    """A platform version."""
    return Version("6.1.0")


@pytest.fixture
def version_b() -> Version:
    """Another platform version."""
    return Version("6.2.0")


@pytest.fixture
def revision_a() -> ApplicationRevision:
    """An application revision."""
    return ApplicationRevision("1.0.1-abcdef", source_commit="abcdef")


@pytest.fixture
def revision_b() -> ApplicationRevision:
    """Another application revision."""
    return ApplicationRevision("1.0.2-012345", source_commit="012345")
