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

"""Secure logging utilities for Deploy Stream.

Pipeline events are logged through :func:`log_secure_info`, which scrubs
credentials and personal data from the message and can mirror the entry
into a log file of the application the event belongs to.
"""

import logging
import re
import threading
import traceback
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Pattern

_FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(application)s] %(message)s"

_log_base: Optional[Path] = None

_application_loggers: Dict[str, logging.LoggerAdapter] = {}
_application_loggers_lock = threading.Lock()


class _Redaction(NamedTuple):
    pattern: Pattern[str]
    replacement: str


_REDACTIONS = (
    _Redaction(re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b"), "<REDACTED_IP>"),
    _Redaction(
        re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "<REDACTED_TOKEN>"
    ),
    _Redaction(re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.]+"), r"\1<REDACTED_TOKEN>"),
    _Redaction(
        re.compile(
            r"(?i)((?:password|passwd|secret|api_key|apikey|token|auth_token)"
            r"\s*[=:]\s*)[^\s,;\"']+"
        ),
        r"\1<REDACTED>",
    ),
    _Redaction(
        re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "<REDACTED_EMAIL>"
    ),
)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _sanitize_message(message: str) -> str:
    """Redact sensitive data from a log message."""
    for redaction in _REDACTIONS:
        message = redaction.pattern.sub(redaction.replacement, message)
    return message


def configure_log_dir(log_dir: Optional[str]) -> None:
    """Set the directory per-application log files are written to.

    Closes any open application log files. ``None`` disables the files;
    entries then only go to the module logger.
    """
    global _log_base  # pylint: disable=global-statement
    with _application_loggers_lock:
        for application_id in list(_application_loggers):
            _close_application_logger(application_id)
        _log_base = Path(log_dir) if log_dir else None


def remove_application_logger(application_id: str) -> None:
    """Close and forget the log file of *application_id*, if open."""
    with _application_loggers_lock:
        _close_application_logger(application_id)


def _close_application_logger(application_id: str) -> None:
    adapter = _application_loggers.pop(application_id, None)
    if adapter is None:
        return
    for handler in list(adapter.logger.handlers):
        handler.close()
        adapter.logger.removeHandler(handler)


def _application_logger(application_id: str) -> Optional[logging.LoggerAdapter]:
    """Return the logger writing to the application's file, opening it on first use.

    Only one handler is ever attached per application, also when several
    threads log for a new application at once.
    """
    adapter = _application_loggers.get(application_id)
    if adapter is not None:
        return adapter

    with _application_loggers_lock:
        adapter = _application_loggers.get(application_id)
        if adapter is not None:
            return adapter
        if _log_base is None:
            return None

        log_file = _log_base / (application_id.replace(":", ".") + ".log")
        try:
            _log_base.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(str(log_file), mode="a")
        except OSError:
            logging.getLogger(__name__).warning(
                "Cannot open application log file %s", log_file
            )
            return None

        handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        app_logger = logging.getLogger(f"deploy_stream.application.{application_id}")
        app_logger.setLevel(logging.DEBUG)
        app_logger.propagate = False
        app_logger.addHandler(handler)
        adapter = logging.LoggerAdapter(app_logger, {"application": application_id})
        _application_loggers[application_id] = adapter
        return adapter


def log_secure_info(
    level: str,
    message: str,
    identifier: Optional[str] = None,
    application_id: Optional[str] = None,
    exc_info: bool = False,
) -> None:
    """Log a message after redacting sensitive data.

    IP addresses, tokens, passwords, API keys and emails are replaced with
    ``<REDACTED_*>`` placeholders. Unknown levels log at INFO.

    Args:
        level: ``'debug'``, ``'info'``, ``'warning'``, ``'error'`` or ``'critical'``.
        message: Human-readable log message.
        identifier: Optional opaque id, such as a correlation id; only its
            first 8 characters are logged.
        application_id: Also write the entry to this application's log file.
        exc_info: Append the traceback of the exception being handled.
    """
    text = f"{message}: {identifier[:8]}..." if identifier else message
    if exc_info:
        text = f"{text}\n{traceback.format_exc().rstrip()}"
    text = _sanitize_message(text)

    level_no = _LEVELS.get(level, logging.INFO)
    logging.getLogger(__name__).log(level_no, text)

    if application_id:
        adapter = _application_logger(application_id)
        if adapter is not None:
            adapter.log(level_no, text)
