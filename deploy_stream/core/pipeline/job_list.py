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


"""Filterable, immutable list of job statuses."""

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, List, Tuple

if TYPE_CHECKING:
    from .catalog import JobType
    from .entities import JobStatus


class JobList:
    """An immutable list of job statuses with chainable filters.

    Each filter returns a new list; the original is left untouched.
    """

    def __init__(self, statuses: Tuple["JobStatus", ...]) -> None:
        self._statuses = statuses

    @classmethod
    def of(cls, statuses: Iterable["JobStatus"]) -> "JobList":
        """Create a list of the given statuses."""
        return cls(tuple(statuses))

    def _filter(self, condition: Callable[["JobStatus"], bool]) -> "JobList":
        return JobList(tuple(status for status in self._statuses if condition(status)))

    def failing(self) -> "JobList":
        """Jobs whose last completion failed."""
        return self._filter(lambda status: status.is_failing)

    def running(self, timeout_limit: datetime) -> "JobList":
        """Jobs triggered after timeout_limit which have not completed since."""
        return self._filter(lambda status: status.is_running(timeout_limit))

    def types(self) -> List["JobType"]:
        """Job types of this list."""
        return [status.job_type for status in self._statuses]

    def any_match(self) -> bool:
        """Whether this list is non-empty."""
        return bool(self._statuses)

    def __iter__(self) -> Iterator["JobStatus"]:
        return iter(self._statuses)

    def __len__(self) -> int:
        return len(self._statuses)
