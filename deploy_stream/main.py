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

"""Deploy Stream API Server.

Builds the FastAPI application tracking deployment pipelines.

Usage:
    uvicorn deploy_stream.main:app --host 0.0.0.0 --port $PORT
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Tuple

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deploy_stream import __version__
from deploy_stream.api.pipeline.schemas import ErrorResponse
from deploy_stream.api.router import api_router
from deploy_stream.common.logging_utils import configure_log_dir
from deploy_stream.container import DevContainer, container

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


def create_app(app_container: DevContainer) -> FastAPI:
    """Create the API application on top of the given container."""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        config = app_container.config()
        configure_log_dir(config.logging.log_dir)
        logger.info(
            "Tracking %s system pipelines, jobs time out after %d minutes",
            config.pipeline.system.value,
            config.pipeline.job_timeout_minutes,
        )
        yield
        configure_log_dir(None)
        logger.info("Application shutdown complete")

    application = FastAPI(
        title="Deploy Stream API",
        description="Tracks which deployment jobs ran for an application, "
                    "and which changes may be promoted to the next environment",
        version=__version__,
        lifespan=lifespan,
    )
    application.container = app_container

    application.add_middleware(
        CORSMiddleware,
        allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    application.include_router(api_router)

    @application.get("/", summary="Service information")
    async def root() -> dict:
        """Return service name, version and documentation location."""
        return {
            "service": "deploy-stream",
            "version": __version__,
            "docs": application.docs_url,
        }

    @application.get("/health", summary="Health check", status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Liveness probe."""
        return {"status": "healthy"}

    @application.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path,
            exc_info=exc,
        )
        body = ErrorResponse(
            error="INTERNAL_ERROR",
            message="An internal server error occurred",
            correlation_id=request.headers.get("X-Correlation-Id", ""),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
        )

    return application


app = create_app(container)


def get_server_config() -> Tuple[str, int]:
    """Read the bind address from HOST and PORT.

    Raises:
        ValueError: If HOST is blank or PORT is not a valid port number.
    """
    host = os.getenv("HOST", "0.0.0.0").strip()
    if not host:
        raise ValueError("HOST environment variable cannot be empty")

    port_env = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_env)
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got: {port_env}") from exc
    if not 1 <= port <= 65535:
        raise ValueError(f"PORT {port} is outside 1-65535")
    return host, port


if __name__ == "__main__":
    import uvicorn

    try:
        bind_host, bind_port = get_server_config()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise
    logger.info("Starting Deploy Stream API server on %s:%d", bind_host, bind_port)
    uvicorn.run("deploy_stream.main:app", host=bind_host, port=bind_port)
