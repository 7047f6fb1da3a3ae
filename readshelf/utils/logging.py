"""Logging setup for the readshelf CLI.

Log records go to stderr by default so that command output on stdout stays
clean; containers get stdout, and a rotating file can be added on top.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Literal, Optional

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()
LOG_OUTPUT = os.environ.get("LOG_OUTPUT", "stderr").lower()
LOG_FILE_PATH = os.environ.get("LOG_FILE_PATH", "logs/readshelf.log")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text").lower()

LogOutput = Literal["stderr", "stdout", "file", "both"]
LogFormat = Literal["text", "json"]

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
_JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", '
    '"file": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
)


def is_kubernetes_env() -> bool:
    """True when running inside a Kubernetes pod."""
    if os.environ.get("K8S_CLUSTER") or os.environ.get("KUBERNETES_SERVICE_HOST"):
        return True
    return os.path.exists("/var/run/secrets/kubernetes.io/serviceaccount")


def _handlers_for(output: str, file_path: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if output == "stdout":
        handlers.append(logging.StreamHandler(sys.stdout))
    elif output in ("stderr", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))

    if output in ("file", "both"):
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(file_path, maxBytes=10 * 1024 * 1024, backupCount=5))
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
    module: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Level name (e.g. "INFO") or number. Defaults to LOG_LEVEL.
    output:
        "stderr", "stdout", "file", or "both" (stderr plus file). Defaults
        to LOG_OUTPUT, or "stdout" inside Kubernetes.
    file_path:
        Log file used by "file" and "both".
    log_format:
        "text" or "json".
    module:
        Optional logger name that should also get ``level``.
    """
    # Read at call time so a .env loaded by main() is honoured
    if level is None:
        level = os.environ.get("LOG_LEVEL", LOG_LEVEL).upper()
    if log_format is None:
        log_format = os.environ.get("LOG_FORMAT", LOG_FORMAT).lower()
    if output is None:
        if "LOG_OUTPUT" not in os.environ and is_kubernetes_env():
            output = "stdout"
        else:
            output = os.environ.get("LOG_OUTPUT", LOG_OUTPUT).lower()
    if file_path is None:
        file_path = os.environ.get("LOG_FILE_PATH", LOG_FILE_PATH)

    formatter = logging.Formatter(_JSON_FORMAT if log_format == "json" else _TEXT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in _handlers_for(output, file_path):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if module:
        logging.getLogger(module).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
