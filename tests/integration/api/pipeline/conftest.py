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

"""Shared fixtures for Pipeline API integration tests."""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from deploy_stream.container import container
from deploy_stream.infra.id_generator import UUIDv4Generator
from deploy_stream.main import app

APPLICATIONS_URL = "/api/v1/applications"


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh container state for each test."""
    container.reset_singletons()
    return TestClient(app)


@pytest.fixture(name="uuid_generator")
def uuid_generator_fixture():
    """UUID generator for test fixtures."""
    return UUIDv4Generator()


@pytest.fixture
def unique_correlation_id(uuid_generator) -> str:
    """Generate unique correlation ID for each test."""
    return str(uuid_generator.generate())


@pytest.fixture
def headers(unique_correlation_id) -> Dict[str, str]:
    """Standard request headers."""
    return {"X-Correlation-Id": unique_correlation_id}


@pytest.fixture
def registered_app(client, headers) -> str:
    """Register an application and return its pipeline URL."""
    response = client.post(
        APPLICATIONS_URL,
        json={"tenant": "tenant1", "application": "app1"},
        headers=headers,
    )
    assert response.status_code == 201
    return f"{APPLICATIONS_URL}/{response.json()['application_id']}/pipeline"
