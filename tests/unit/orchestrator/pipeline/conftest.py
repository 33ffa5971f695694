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

"""Fixtures for pipeline use case tests."""

# pylint: disable=redefined-outer-name

import pytest

from deploy_stream.common.config import PipelineConfig
from deploy_stream.core.pipeline.entities import Application
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.core.pipeline.value_objects import CorrelationId
from deploy_stream.infra.repositories import InMemoryApplicationRepository


@pytest.fixture
def application_repo():
    """Empty in-memory application repository."""
    return InMemoryApplicationRepository()


@pytest.fixture
def registered_application(application_repo, application_id, start_time):
    """Application registered in the repository."""
    application = Application(
        application_id=application_id, created_at=start_time, updated_at=start_time
    )
    application_repo.save(application)
    return application


@pytest.fixture
def pipeline_config():
    """Pipeline settings for the main system with a one hour timeout."""
    return PipelineConfig(job_timeout_minutes=60)


@pytest.fixture
def update_service(application_repo, clock):
    """Update service over the repository with the shared clock."""
    return ApplicationUpdateService(application_repo, max_attempts=3, clock=clock)


@pytest.fixture
def correlation_id():
    """Correlation id for commands."""
    return CorrelationId("corr-use-case-1")
