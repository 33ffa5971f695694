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

"""Queries answered from an application's pipeline state."""

from dataclasses import dataclass
from typing import Optional

from deploy_stream.core.pipeline.value_objects import (
    ApplicationId,
    Change,
    CorrelationId,
    Environment,
)


@dataclass(frozen=True)
class GetPipelineStatusCommand:
    """Query for the status of every job of an application."""

    application_id: ApplicationId
    correlation_id: CorrelationId


@dataclass(frozen=True)
class CheckDeployabilityCommand:
    """Query for whether a change may be deployed to an environment.

    Attributes:
        application_id: Application to check.
        environment: Target environment; None means nothing to gate.
        change: Change to deploy; None means nothing to gate.
        correlation_id: Request correlation identifier for tracing.
    """

    application_id: ApplicationId
    environment: Optional[Environment]
    change: Optional[Change]
    correlation_id: CorrelationId
