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

"""In-memory implementation of the application repository.

It is used in testing and development.
"""

import threading
from typing import Dict, Optional

from deploy_stream.core.pipeline.entities import Application
from deploy_stream.core.pipeline.exceptions import OptimisticLockError
from deploy_stream.core.pipeline.value_objects import ApplicationId


class InMemoryApplicationRepository:
    """Thread-safe dict store with optimistic version checks."""

    def __init__(self) -> None:
        self._applications: Dict[str, Application] = {}
        self._lock = threading.Lock()

    def save(self, application: Application) -> None:
        key = str(application.application_id)
        with self._lock:
            existing = self._applications.get(key)
            actual_version = existing.version if existing else 0
            if actual_version != application.version - 1:
                raise OptimisticLockError(
                    entity_type="Application",
                    entity_id=key,
                    expected_version=application.version - 1,
                    actual_version=actual_version,
                )
            self._applications[key] = application

    def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        with self._lock:
            return self._applications.get(str(application_id))

    def exists(self, application_id: ApplicationId) -> bool:
        with self._lock:
            return str(application_id) in self._applications
