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

"""Unit tests for JobStatus and its parts."""

from datetime import timedelta

import pytest

from deploy_stream.core.pipeline import catalog
from deploy_stream.core.pipeline.entities import (
    JobCompletion,
    JobError,
    JobRun,
    JobStatus,
    JobSuccess,
)
from deploy_stream.core.pipeline.value_objects import (
    ApplicationChange,
    ApplicationRevision,
    VersionChange,
)


def _completion(build_number, at, job_error=None):
    return JobCompletion(
        build_number=build_number,
        job_error=job_error,
        notified_at=at,
        recorded_at=at,
    )


class TestJobRun:
    """Tests for matching runs against changes."""

    def test_was_for_version_change(self, version_a, version_b, start_time):
        run = JobRun(version_a, None, True, "upgrade", start_time)
        assert run.was_for(VersionChange(version_a))
        assert not run.was_for(VersionChange(version_b))

    def test_was_for_application_change(self, version_a, revision_a, revision_b, start_time):
        run = JobRun(version_a, revision_a, False, "deploy", start_time)
        assert run.was_for(ApplicationChange(ApplicationRevision(revision_a.package_hash)))
        assert not run.was_for(ApplicationChange(revision_b))

    def test_application_change_without_revision_never_matches(
        self, version_a, revision_a, start_time
    ):
        assert not JobRun(version_a, revision_a, False, "deploy", start_time).was_for(
            ApplicationChange(None)
        )
        assert not JobRun(version_a, None, False, "deploy", start_time).was_for(
            ApplicationChange(None)
        )


class TestJobSuccess:
    """Tests for JobSuccess."""

    def test_success_without_run_matches_nothing(self, version_a, start_time):
        success = JobSuccess(completion=_completion(1, start_time), run=None)
        assert not success.was_for(VersionChange(version_a))


class TestJobStatusTransitions:
    """Tests for JobStatus updates."""

    def test_initial_status_is_empty(self):
        status = JobStatus.initial(catalog.SYSTEM_TEST)
        assert status.last_triggered is None
        assert status.last_completed is None
        assert status.last_success is None
        assert status.first_failing is None
        assert not status.is_failing

    def test_triggering_replaces_last_triggered(self, version_a, version_b, start_time):
        status = JobStatus.initial(catalog.SYSTEM_TEST).with_triggering(
            version_a, None, True, "first", start_time
        )
        later = start_time + timedelta(minutes=5)
        status = status.with_triggering(version_b, None, True, "second", later)
        assert status.last_triggered.version == version_b
        assert status.last_triggered.reason == "second"
        assert status.last_triggered.at == later

    def test_success_ties_to_current_run(self, version_a, start_time):
        status = JobStatus.initial(catalog.SYSTEM_TEST).with_triggering(
            version_a, None, True, "upgrade", start_time
        )
        completion = _completion(7, start_time + timedelta(minutes=1))
        status = status.with_completion(completion)
        assert status.last_completed.success
        assert status.last_completed == completion
        assert status.last_success.completion == completion
        assert status.last_success.run == status.last_triggered
        assert status.first_failing is None

    def test_failure_keeps_last_success(self, version_a, start_time):
        status = (
            JobStatus.initial(catalog.SYSTEM_TEST)
            .with_triggering(version_a, None, True, "upgrade", start_time)
            .with_completion(_completion(1, start_time + timedelta(minutes=1)))
        )
        success = status.last_success
        status = status.with_completion(
            _completion(2, start_time + timedelta(minutes=2), JobError.UNKNOWN)
        )
        assert status.is_failing
        assert status.last_success == success

    def test_first_failing_is_start_of_streak(self, start_time):
        first = _completion(1, start_time, JobError.UNKNOWN)
        second = _completion(2, start_time + timedelta(minutes=1), JobError.OUT_OF_CAPACITY)
        status = JobStatus.initial(catalog.STAGING_TEST).with_completion(first)
        status = status.with_completion(second)
        assert status.first_failing == first
        assert status.last_completed == second
        assert status.is_out_of_capacity

    def test_success_ends_failure_streak(self, start_time):
        status = (
            JobStatus.initial(catalog.STAGING_TEST)
            .with_completion(_completion(1, start_time, JobError.UNKNOWN))
            .with_completion(_completion(2, start_time + timedelta(minutes=1)))
        )
        assert status.first_failing is None
        status = status.with_completion(
            _completion(3, start_time + timedelta(minutes=2), JobError.UNKNOWN)
        )
        assert status.first_failing.build_number == 3

    def test_updates_leave_original_untouched(self, version_a, start_time):
        status = JobStatus.initial(catalog.SYSTEM_TEST)
        status.with_triggering(version_a, None, True, "upgrade", start_time)
        assert status.last_triggered is None
        with pytest.raises(AttributeError):
            status.last_triggered = None


class TestJobStatusRunning:
    """Tests for JobStatus.is_running."""

    def test_never_triggered_is_not_running(self, start_time):
        assert not JobStatus.initial(catalog.SYSTEM_TEST).is_running(start_time)

    def test_triggered_and_not_completed_is_running(self, version_a, start_time):
        status = JobStatus.initial(catalog.SYSTEM_TEST).with_triggering(
            version_a, None, True, "upgrade", start_time
        )
        assert status.is_running(start_time - timedelta(hours=1))

    def test_triggered_before_timeout_limit_is_not_running(self, version_a, start_time):
        status = JobStatus.initial(catalog.SYSTEM_TEST).with_triggering(
            version_a, None, True, "upgrade", start_time
        )
        assert not status.is_running(start_time)
        assert not status.is_running(start_time + timedelta(hours=1))

    def test_completed_after_triggering_is_not_running(self, version_a, start_time):
        status = (
            JobStatus.initial(catalog.SYSTEM_TEST)
            .with_triggering(version_a, None, True, "upgrade", start_time)
            .with_completion(_completion(1, start_time + timedelta(minutes=3)))
        )
        assert not status.is_running(start_time - timedelta(hours=1))

    def test_retriggered_after_completion_is_running(self, version_a, start_time):
        status = (
            JobStatus.initial(catalog.SYSTEM_TEST)
            .with_triggering(version_a, None, True, "upgrade", start_time)
            .with_completion(_completion(1, start_time + timedelta(minutes=3)))
            .with_triggering(version_a, None, True, "retry", start_time + timedelta(minutes=4))
        )
        assert status.is_running(start_time - timedelta(hours=1))
