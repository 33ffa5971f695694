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

"""Configuration loader for Deploy Stream."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import configparser

from deploy_stream.core.pipeline.value_objects import SystemName

DEFAULT_CONFIG_PATH = "/etc/deploy_stream/deploy_stream.ini"
SUPPORTED_BACKENDS = ("memory",)


@dataclass
class PipelineConfig:
    """Pipeline tracking configuration."""
    system: SystemName = SystemName.MAIN
    job_timeout_minutes: int = 720


@dataclass
class StoreConfig:
    """Application store configuration."""
    backend: str = "memory"
    max_update_attempts: int = 5


@dataclass
class LoggingConfig:
    """Logging configuration."""
    log_dir: str = "/var/log/deploy_stream"


@dataclass
class DeployStreamConfig:
    """Deploy Stream configuration."""
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> DeployStreamConfig:
    """Load Deploy Stream configuration from INI file.

    Args:
        config_path: Path to configuration file. If None, uses DEPLOY_STREAM_CONFIG_PATH
                    environment variable or default path.

    Returns:
        DeployStreamConfig instance.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv("DEPLOY_STREAM_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser()
    parser.read(config_file)

    if not parser.sections():
        raise ValueError(f"Empty configuration file: {config_file}")

    defaults = DeployStreamConfig()

    # Parse pipeline config
    system_name = parser.get("pipeline", "system", fallback=defaults.pipeline.system.value)
    job_timeout_minutes = parser.getint(
        "pipeline", "job_timeout_minutes", fallback=defaults.pipeline.job_timeout_minutes
    )
    if job_timeout_minutes <= 0:
        raise ValueError(
            f"job_timeout_minutes must be positive, got {job_timeout_minutes}"
        )
    pipeline = PipelineConfig(
        system=SystemName.from_name(system_name),
        job_timeout_minutes=job_timeout_minutes,
    )

    # Parse store config
    backend = parser.get("store", "backend", fallback=defaults.store.backend)
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported store backend: {backend}. "
            f"Supported: {', '.join(SUPPORTED_BACKENDS)}"
        )
    max_update_attempts = parser.getint(
        "store", "max_update_attempts", fallback=defaults.store.max_update_attempts
    )
    if max_update_attempts <= 0:
        raise ValueError(
            f"max_update_attempts must be positive, got {max_update_attempts}"
        )
    store = StoreConfig(backend=backend, max_update_attempts=max_update_attempts)

    log_config = LoggingConfig(
        log_dir=parser.get("logging", "log_dir", fallback=defaults.logging.log_dir)
    )

    return DeployStreamConfig(pipeline=pipeline, store=store, logging=log_config)
