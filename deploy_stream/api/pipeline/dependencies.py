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

"""FastAPI dependency providers for the Pipeline API."""

from typing import Optional

from fastapi import Header

from deploy_stream.core.pipeline.value_objects import CorrelationId
from deploy_stream.orchestrator.pipeline.use_cases import (
    AssignProjectIdUseCase,
    CheckDeployabilityUseCase,
    GetPipelineStatusUseCase,
    LinkIssueUseCase,
    ListJobTypesUseCase,
    RecordJobCompletionUseCase,
    RecordJobTriggeringUseCase,
    RegisterApplicationUseCase,
    RemoveJobUseCase,
)


def _get_container():
    """Lazy import of container to avoid circular imports."""
    from deploy_stream.container import container  # pylint: disable=import-outside-toplevel
    return container


# ------------------------------------------------------------------
# Use-case providers
# ------------------------------------------------------------------
def get_register_application_use_case() -> RegisterApplicationUseCase:
    """Provide register-application use case."""
    return _get_container().register_application_use_case()


def get_record_completion_use_case() -> RecordJobCompletionUseCase:
    """Provide record-completion use case."""
    return _get_container().record_completion_use_case()


def get_record_triggering_use_case() -> RecordJobTriggeringUseCase:
    """Provide record-triggering use case."""
    return _get_container().record_triggering_use_case()


def get_remove_job_use_case() -> RemoveJobUseCase:
    """Provide remove-job use case."""
    return _get_container().remove_job_use_case()


def get_assign_project_id_use_case() -> AssignProjectIdUseCase:
    """Provide assign-project-id use case."""
    return _get_container().assign_project_id_use_case()


def get_link_issue_use_case() -> LinkIssueUseCase:
    """Provide link-issue use case."""
    return _get_container().link_issue_use_case()


def get_pipeline_status_use_case() -> GetPipelineStatusUseCase:
    """Provide pipeline-status use case."""
    return _get_container().pipeline_status_use_case()


def get_check_deployability_use_case() -> CheckDeployabilityUseCase:
    """Provide check-deployability use case."""
    return _get_container().check_deployability_use_case()


def get_list_job_types_use_case() -> ListJobTypesUseCase:
    """Provide list-job-types use case."""
    return _get_container().list_job_types_use_case()


def get_correlation_id(
    x_correlation_id: Optional[str] = Header(
        default=None,
        alias="X-Correlation-Id",
        description="Request tracing ID",
    ),
) -> CorrelationId:
    """Return provided correlation ID or generate one."""
    if x_correlation_id:
        try:
            return CorrelationId(x_correlation_id)
        except ValueError:
            pass

    generator = _get_container().uuid_generator()
    return CorrelationId(str(generator.generate()))
