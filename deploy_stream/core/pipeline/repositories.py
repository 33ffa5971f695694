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

"""Repository port interfaces (Protocols) for the deployment pipeline domain.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

import uuid
from typing import Optional, Protocol

from .entities import Application
from .value_objects import ApplicationId


class ApplicationRepository(Protocol):
    """Repository port for application records and their pipeline state."""

    def save(self, application: Application) -> None:
        """Persist an application record.

        Inserts version 1 of a new record, or replaces the stored record
        when it is at ``application.version - 1``.

        Args:
            application: Application record to persist.

        Raises:
            OptimisticLockError: If the stored version is not the one
                this record was derived from.
        """
        ...

    def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        """Retrieve an application record.

        Args:
            application_id: Application identifier.

        Returns:
            Application record if found, None otherwise.
        """
        ...

    def exists(self, application_id: ApplicationId) -> bool:
        """Check if an application is registered."""
        ...


class UUIDGenerator(Protocol):
    """Port for generating UUIDs."""

    def generate(self) -> uuid.UUID:
        """Generate a new UUID."""
        ...
