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

"""Unit tests for the configuration loader."""

import pytest

from deploy_stream.common.config import DeployStreamConfig, load_config
from deploy_stream.core.pipeline.value_objects import SystemName


def _write(tmp_path, content):
    path = tmp_path / "deploy_stream.ini"
    path.write_text(content)
    return str(path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_full_config(self, tmp_path):
        path = _write(
            tmp_path,
            "[pipeline]\nsystem = cd\njob_timeout_minutes = 60\n"
            "[store]\nbackend = memory\nmax_update_attempts = 3\n"
            "[logging]\nlog_dir = /tmp/deploy_stream_logs\n",
        )

        config = load_config(path)

        assert config.pipeline.system == SystemName.CD
        assert config.pipeline.job_timeout_minutes == 60
        assert config.store.max_update_attempts == 3
        assert config.logging.log_dir == "/tmp/deploy_stream_logs"

    def test_missing_sections_use_defaults(self, tmp_path):
        config = load_config(_write(tmp_path, "[pipeline]\nsystem = main\n"))
        defaults = DeployStreamConfig()
        assert config.pipeline.job_timeout_minutes == defaults.pipeline.job_timeout_minutes
        assert config.store == defaults.store
        assert config.logging == defaults.logging

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = _write(tmp_path, "[pipeline]\njob_timeout_minutes = 30\n")
        monkeypatch.setenv("DEPLOY_STREAM_CONFIG_PATH", path)
        assert load_config().pipeline.job_timeout_minutes == 30

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.ini"))

    def test_empty_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Empty configuration"):
            load_config(_write(tmp_path, ""))

    def test_unknown_system_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown system"):
            load_config(_write(tmp_path, "[pipeline]\nsystem = public\n"))

    def test_non_positive_timeout_raises(self, tmp_path):
        with pytest.raises(ValueError, match="job_timeout_minutes"):
            load_config(_write(tmp_path, "[pipeline]\njob_timeout_minutes = 0\n"))

    def test_unsupported_backend_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported store backend"):
            load_config(_write(tmp_path, "[store]\nbackend = postgres\n"))

    def test_non_positive_attempts_raises(self, tmp_path):
        with pytest.raises(ValueError, match="max_update_attempts"):
            load_config(_write(tmp_path, "[store]\nmax_update_attempts = -1\n"))
