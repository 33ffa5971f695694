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

"""Dependency Injector containers for the Deploy Stream API."""
# pylint: disable=c-extension-no-member

import logging

from dependency_injector import containers, providers

from deploy_stream.common.config import DeployStreamConfig, load_config
from deploy_stream.core.pipeline.services import ApplicationUpdateService
from deploy_stream.infra.id_generator import UUIDv4Generator
from deploy_stream.infra.repositories import InMemoryApplicationRepository
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

logger = logging.getLogger(__name__)


def _load_config() -> DeployStreamConfig:
    """Load the service configuration, falling back to defaults.

    Returns:
        Configuration read from the INI file, or the defaults when the file
        is missing or invalid.
    """
    try:
        return load_config()
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("Using default configuration: %s", exc)
        return DeployStreamConfig()


class DevContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Development profile container.

    Keeps application state in memory. No external dependencies required.
    """

    config = providers.Singleton(_load_config)

    uuid_generator = providers.Singleton(UUIDv4Generator)

    # --- Repositories ---
    application_repository = providers.Singleton(InMemoryApplicationRepository)

    # --- Services ---
    application_update_service = providers.Singleton(
        ApplicationUpdateService,
        application_repo=application_repository,
        max_attempts=config.provided.store.max_update_attempts,
    )

    # --- Use cases ---
    register_application_use_case = providers.Factory(
        RegisterApplicationUseCase,
        application_repo=application_repository,
    )

    record_completion_use_case = providers.Factory(
        RecordJobCompletionUseCase,
        update_service=application_update_service,
        pipeline_config=config.provided.pipeline,
    )

    record_triggering_use_case = providers.Factory(
        RecordJobTriggeringUseCase,
        update_service=application_update_service,
        pipeline_config=config.provided.pipeline,
    )

    remove_job_use_case = providers.Factory(
        RemoveJobUseCase,
        update_service=application_update_service,
        pipeline_config=config.provided.pipeline,
    )

    assign_project_id_use_case = providers.Factory(
        AssignProjectIdUseCase,
        update_service=application_update_service,
        pipeline_config=config.provided.pipeline,
    )

    link_issue_use_case = providers.Factory(
        LinkIssueUseCase,
        update_service=application_update_service,
        pipeline_config=config.provided.pipeline,
    )

    pipeline_status_use_case = providers.Factory(
        GetPipelineStatusUseCase,
        application_repo=application_repository,
        pipeline_config=config.provided.pipeline,
    )

    check_deployability_use_case = providers.Factory(
        CheckDeployabilityUseCase,
        application_repo=application_repository,
    )

    list_job_types_use_case = providers.Factory(
        ListJobTypesUseCase,
        pipeline_config=config.provided.pipeline,
    )


# Singleton container instance shared across app and dependencies
container = DevContainer()

__all__ = ["DevContainer", "container"]
