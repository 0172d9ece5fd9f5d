"""
Logging Setup Module.

Configures the application logger used across all modules. Messages are
either plain strings or dicts with a ``message`` key plus context fields:

    logger.info({"message": "Fetched open pull requests", "count": 3})

Output modes:
- production: one JSON object per line
- development: ``message key=value ...`` for reading in a terminal
- GitHub Actions: debug, warning and error records carry the runner's
  workflow-command prefixes so they show up as annotations
"""

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

# Workflow commands understood by the Actions runner
ACTIONS_PREFIXES = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


def _as_fields(msg: Any) -> Dict[str, Any]:
    if isinstance(msg, dict):
        return dict(msg)
    return {"message": str(msg)}


class StructuredFormatter(logging.Formatter):
    """Render dict messages as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
        }
        fields.update(_as_fields(record.msg))
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)
        return json.dumps(fields, default=str)


class ConsoleFormatter(logging.Formatter):
    """Render dict messages as ``message key=value`` pairs."""

    def __init__(self, github_actions: bool = False):
        super().__init__()
        self.github_actions = github_actions

    def format(self, record: logging.LogRecord) -> str:
        fields = _as_fields(record.msg)
        message = str(fields.pop("message", ""))
        context = " ".join(f"{key}={value}" for key, value in fields.items())
        text = f"{message} {context}".strip()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"

        if self.github_actions:
            prefix = ACTIONS_PREFIXES.get(record.levelno, "")
            # workflow commands are line based
            if prefix:
                text = text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            return f"{prefix}{text}"
        return f"{self.formatTime(record)} | {record.levelname:<8} | {text}"


class LogManager:
    """
    Builds and owns the application logger.

    Attributes:
        logger (logging.Logger): The configured application logger.
    """

    def __init__(
        self,
        app_name: str,
        log_dir: Optional[str] = None,
        development: bool = False,
        level: int = logging.INFO,
        github_actions: bool = False,
    ):
        """Initialize handlers for the named application logger.

        Args:
            app_name (str): Logger name, also used for the log file name.
            log_dir (Optional[str]): Directory for a rotating log file. No file
                logging when unset.
            development (bool): Human-readable console output.
            level (int): Logging level.
            github_actions (bool): Emit workflow-command prefixes on the console.
        """
        self.logger = logging.getLogger(app_name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console = logging.StreamHandler(sys.stdout)
        if development or github_actions:
            console.setFormatter(ConsoleFormatter(github_actions=github_actions))
        else:
            console.setFormatter(StructuredFormatter())
        self.logger.addHandler(console)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f"{app_name}.log"),
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(file_handler)

        # PyGithub logs every request at debug level
        logging.getLogger("github").setLevel(logging.WARNING)
