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

"""FastAPI routes for deployment pipeline operations."""

import dataclasses
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from deploy_stream.api.pipeline.dependencies import (
    get_assign_project_id_use_case,
    get_check_deployability_use_case,
    get_correlation_id,
    get_link_issue_use_case,
    get_list_job_types_use_case,
    get_pipeline_status_use_case,
    get_record_completion_use_case,
    get_record_triggering_use_case,
    get_register_application_use_case,
    get_remove_job_use_case,
)
from deploy_stream.api.pipeline.schemas import (
    ApplicationResponse,
    AssignProjectIdRequest,
    DeployabilityResponse,
    ErrorResponse,
    JobReportRequest,
    JobTypeResponse,
    LinkIssueRequest,
    PipelineStatusResponse,
    RegisterApplicationRequest,
    TriggerJobRequest,
)
from deploy_stream.common.logging_utils import log_secure_info
from deploy_stream.core.pipeline.exceptions import (
    ApplicationAlreadyExistsError,
    ApplicationNotFoundError,
    ConcurrentUpdateError,
    InvalidProjectIdError,
    PipelineDomainError,
    UnknownStageError,
)
from deploy_stream.core.pipeline.value_objects import (
    ApplicationChange,
    ApplicationId,
    ApplicationRevision,
    Change,
    CorrelationId,
    Environment,
    IssueId,
    RegionName,
    Version,
    VersionChange,
)
from deploy_stream.orchestrator.pipeline.commands import (
    AssignProjectIdCommand,
    CheckDeployabilityCommand,
    GetPipelineStatusCommand,
    LinkIssueCommand,
    RecordJobCompletionCommand,
    RecordJobTriggeringCommand,
    RegisterApplicationCommand,
    RemoveJobCommand,
)
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

router = APIRouter(prefix="/applications", tags=["Pipeline"])
catalog_router = APIRouter(prefix="/pipeline", tags=["Pipeline Catalog"])

_ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    404: {"description": "Application or job not found", "model": ErrorResponse},
    409: {"description": "Conflicting update", "model": ErrorResponse},
    500: {"description": "Internal error", "model": ErrorResponse},
}

_DOMAIN_ERRORS = (
    (ApplicationNotFoundError, status.HTTP_404_NOT_FOUND, "APPLICATION_NOT_FOUND"),
    (UnknownStageError, status.HTTP_404_NOT_FOUND, "UNKNOWN_JOB"),
    (InvalidProjectIdError, status.HTTP_400_BAD_REQUEST, "INVALID_PROJECT_ID"),
    (ApplicationAlreadyExistsError, status.HTTP_409_CONFLICT, "APPLICATION_EXISTS"),
    (ConcurrentUpdateError, status.HTTP_409_CONFLICT, "CONCURRENT_UPDATE"),
)


def _build_error_response(
    error_code: str,
    message: str,
    correlation_id: str,
) -> ErrorResponse:
    return ErrorResponse(
        error=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def _http_error(status_code: int, error_code: str, message: str, correlation_id: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=_build_error_response(error_code, message, correlation_id).model_dump(),
    )


def _domain_error_to_http(exc: PipelineDomainError, correlation_id: str) -> HTTPException:
    for error_type, status_code, error_code in _DOMAIN_ERRORS:
        if isinstance(exc, error_type):
            log_secure_info("warning", f"{error_code}: {exc.message}", correlation_id)
            return _http_error(status_code, error_code, exc.message, correlation_id)
    log_secure_info("error", f"Pipeline domain error: {exc.message}", correlation_id)
    return _http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "PIPELINE_ERROR", exc.message, correlation_id
    )


def _unexpected_error(correlation_id: str) -> HTTPException:
    return _http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        correlation_id,
    )


def _parse_application_id(application_id: str, correlation_id: str) -> ApplicationId:
    try:
        return ApplicationId.from_serialized(application_id)
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_APPLICATION_ID",
            str(exc),
            correlation_id,
        ) from exc


def _to_pipeline_response(result) -> PipelineStatusResponse:
    return PipelineStatusResponse.model_validate(dataclasses.asdict(result))


def _build_change(
    change_type: Optional[str],
    version: Version,
    revision: Optional[ApplicationRevision],
) -> Optional[Change]:
    if change_type == "version":
        return VersionChange(version)
    if change_type == "application":
        return ApplicationChange(revision)
    return None


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register application",
    description="Register an application with an empty deployment pipeline",
    responses={201: {"description": "Application registered"}, **_ERROR_RESPONSES},
)
def register_application(
    request: RegisterApplicationRequest,
    use_case: RegisterApplicationUseCase = Depends(get_register_application_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> ApplicationResponse:
    """Register an application."""
    try:
        application_id = ApplicationId(request.tenant, request.application, request.instance)
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_APPLICATION_ID", str(exc), correlation_id.value
        ) from exc

    logger.info(
        "Register application request: application_id=%s, correlation_id=%s",
        application_id,
        correlation_id.value,
    )
    try:
        result = use_case.execute(
            RegisterApplicationCommand(application_id=application_id, correlation_id=correlation_id)
        )
        return ApplicationResponse.model_validate(dataclasses.asdict(result))
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error registering application")
        raise _unexpected_error(correlation_id.value) from exc


@router.get(
    "/{application_id}/pipeline",
    response_model=PipelineStatusResponse,
    summary="Get pipeline status",
    description="Return the status of every job of the application",
    responses=_ERROR_RESPONSES,
)
def get_pipeline_status(
    application_id: str,
    use_case: GetPipelineStatusUseCase = Depends(get_pipeline_status_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Return the pipeline status of an application."""
    validated_id = _parse_application_id(application_id, correlation_id.value)
    try:
        result = use_case.execute(
            GetPipelineStatusCommand(application_id=validated_id, correlation_id=correlation_id)
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error reading pipeline status")
        raise _unexpected_error(correlation_id.value) from exc


@router.post(
    "/{application_id}/pipeline/job-reports",
    response_model=PipelineStatusResponse,
    summary="Report job completion",
    description="Record a completion report sent by the build system",
    responses=_ERROR_RESPONSES,
)
def report_job_completion(
    application_id: str,
    request: JobReportRequest,
    use_case: RecordJobCompletionUseCase = Depends(get_record_completion_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Record a job completion report."""
    validated_id = _parse_application_id(application_id, correlation_id.value)
    logger.info(
        "Job report: application_id=%s, job=%s, build=%d, correlation_id=%s",
        validated_id,
        request.job_name,
        request.build_number,
        correlation_id.value,
    )
    try:
        result = use_case.execute(
            RecordJobCompletionCommand(
                application_id=validated_id,
                job_name=request.job_name,
                project_id=request.project_id,
                build_number=request.build_number,
                job_error=request.job_error,
                correlation_id=correlation_id,
            )
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error recording job report")
        raise _unexpected_error(correlation_id.value) from exc


@router.post(
    "/{application_id}/pipeline/jobs/{job_name}/triggering",
    response_model=PipelineStatusResponse,
    summary="Record job triggering",
    description="Record that a job was dispatched to the build system",
    responses=_ERROR_RESPONSES,
)
def trigger_job(
    application_id: str,
    job_name: str,
    request: TriggerJobRequest,
    use_case: RecordJobTriggeringUseCase = Depends(get_record_triggering_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Record a job triggering."""
    # pylint: disable=too-many-arguments,too-many-positional-arguments
    validated_id = _parse_application_id(application_id, correlation_id.value)
    try:
        version = Version(request.version)
        revision = (
            ApplicationRevision(request.revision, request.source_commit)
            if request.revision else None
        )
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_CHANGE", str(exc), correlation_id.value
        ) from exc

    try:
        result = use_case.execute(
            RecordJobTriggeringCommand(
                application_id=validated_id,
                job_name=job_name,
                change=_build_change(request.change_type, version, revision),
                version=version,
                revision=revision,
                reason=request.reason,
                correlation_id=correlation_id,
            )
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error recording job triggering")
        raise _unexpected_error(correlation_id.value) from exc


@router.delete(
    "/{application_id}/pipeline/jobs/{job_name}",
    response_model=PipelineStatusResponse,
    summary="Remove job",
    description="Forget all status of a job",
    responses=_ERROR_RESPONSES,
)
def remove_job(
    application_id: str,
    job_name: str,
    use_case: RemoveJobUseCase = Depends(get_remove_job_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Remove a job from the pipeline state."""
    validated_id = _parse_application_id(application_id, correlation_id.value)
    try:
        result = use_case.execute(
            RemoveJobCommand(
                application_id=validated_id, job_name=job_name, correlation_id=correlation_id
            )
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error removing job")
        raise _unexpected_error(correlation_id.value) from exc


@router.put(
    "/{application_id}/pipeline/project",
    response_model=PipelineStatusResponse,
    summary="Assign project id",
    description="Set the build system project id of the application",
    responses=_ERROR_RESPONSES,
)
def assign_project_id(
    application_id: str,
    request: AssignProjectIdRequest,
    use_case: AssignProjectIdUseCase = Depends(get_assign_project_id_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Assign the build system project id."""
    validated_id = _parse_application_id(application_id, correlation_id.value)
    try:
        result = use_case.execute(
            AssignProjectIdCommand(
                application_id=validated_id,
                project_id=request.project_id,
                correlation_id=correlation_id,
            )
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error assigning project id")
        raise _unexpected_error(correlation_id.value) from exc


@router.put(
    "/{application_id}/pipeline/issue",
    response_model=PipelineStatusResponse,
    summary="Link issue",
    description="Link the pipeline to an issue, or unlink it",
    responses=_ERROR_RESPONSES,
)
def link_issue(
    application_id: str,
    request: LinkIssueRequest,
    use_case: LinkIssueUseCase = Depends(get_link_issue_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> PipelineStatusResponse:
    """Link or unlink an issue."""
    validated_id = _parse_application_id(application_id, correlation_id.value)
    try:
        issue_id = IssueId(request.issue_id) if request.issue_id else None
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_ISSUE_ID", str(exc), correlation_id.value
        ) from exc

    try:
        result = use_case.execute(
            LinkIssueCommand(
                application_id=validated_id, issue_id=issue_id, correlation_id=correlation_id
            )
        )
        return _to_pipeline_response(result)
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error linking issue")
        raise _unexpected_error(correlation_id.value) from exc


@router.get(
    "/{application_id}/pipeline/deployable",
    response_model=DeployabilityResponse,
    summary="Check deployability",
    description="Ask the promotion gate whether a change may be deployed to an environment",
    responses=_ERROR_RESPONSES,
)
def check_deployable(
    application_id: str,
    environment: Optional[str] = Query(default=None, description="Target environment"),
    version: Optional[str] = Query(default=None, description="Platform version change"),
    revision: Optional[str] = Query(default=None, description="Application revision change"),
    use_case: CheckDeployabilityUseCase = Depends(get_check_deployability_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> DeployabilityResponse:
    """Evaluate the promotion gate."""
    # pylint: disable=too-many-arguments,too-many-positional-arguments
    validated_id = _parse_application_id(application_id, correlation_id.value)
    if version and revision:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_CHANGE",
            "Give either a version or a revision, not both",
            correlation_id.value,
        )
    try:
        target = Environment.from_name(environment) if environment else None
        change: Optional[Change] = None
        if version:
            change = VersionChange(Version(version))
        elif revision:
            change = ApplicationChange(ApplicationRevision(revision))
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_CHANGE", str(exc), correlation_id.value
        ) from exc

    try:
        result = use_case.execute(
            CheckDeployabilityCommand(
                application_id=validated_id,
                environment=target,
                change=change,
                correlation_id=correlation_id,
            )
        )
        return DeployabilityResponse.model_validate(dataclasses.asdict(result))
    except PipelineDomainError as exc:
        raise _domain_error_to_http(exc, correlation_id.value) from exc
    except Exception as exc:
        logger.exception("Unexpected error checking deployability")
        raise _unexpected_error(correlation_id.value) from exc


@catalog_router.get(
    "/jobs",
    response_model=List[JobTypeResponse],
    summary="List jobs",
    description="List the jobs of the configured system, or the job of an environment and region",
    responses={400: {"description": "Invalid request", "model": ErrorResponse}},
)
def list_job_types(
    environment: Optional[str] = Query(default=None, description="Environment"),
    region: Optional[str] = Query(default=None, description="Region"),
    use_case: ListJobTypesUseCase = Depends(get_list_job_types_use_case),
    correlation_id: CorrelationId = Depends(get_correlation_id),
) -> List[JobTypeResponse]:
    """List catalog jobs."""
    try:
        result = use_case.execute(
            environment=Environment.from_name(environment) if environment else None,
            region=RegionName(region) if region else None,
        )
    except ValueError as exc:
        raise _http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_QUERY", str(exc), correlation_id.value
        ) from exc
    return [JobTypeResponse.model_validate(dataclasses.asdict(view)) for view in result]
