"""Per-run log file.

RunLog is the logging handle for a single packaging run. It attaches a
timestamped file handler to the ``rso_packager`` logger on enter and
flushes, detaches and closes it on exit, so every module logging through
``logging.getLogger(__name__)`` lands in the run's log file.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from types import TracebackType

PACKAGE_LOGGER = "rso_packager"
LOG_FILE_PREFIX = "PackageManager_"
LOG_TIMESTAMP_FORMAT = "%b-%d-%Y-%I-%M"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def log_file_name(now: datetime | None = None) -> str:
    """Return the log file name for a run started at now."""
    now = now or datetime.now()
    return f"{LOG_FILE_PREFIX}{now.strftime(LOG_TIMESTAMP_FORMAT)}.log"


class RunLog:
    """Context manager owning the log file handler for one run.

    Args:
        log_dir: Folder for log files (created if missing).
        level: Logging level name or number.
        enabled: If False, no file is created and the handle is a no-op.
    """

    def __init__(
        self,
        log_dir: Path,
        level: int | str = logging.INFO,
        enabled: bool = True,
    ) -> None:
        self.log_dir = log_dir
        self.level = logging.getLevelName(level) if isinstance(level, str) else level
        self.enabled = enabled
        self.path: Path | None = None
        self._handler: logging.FileHandler | None = None
        self._previous_level: int | None = None
        self._logger = logging.getLogger(PACKAGE_LOGGER)

    def open(self) -> RunLog:
        """Create the log file and attach its handler."""
        if not self.enabled or self._handler is not None:
            return self

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.log_dir / log_file_name()
        handler = logging.FileHandler(self.path, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(self.level)

        self._previous_level = self._logger.level
        self._logger.setLevel(self.level)
        self._logger.addHandler(handler)
        self._handler = handler

        self._logger.info("Package Manager Start")
        return self

    def flush(self) -> None:
        if self._handler is not None:
            self._handler.flush()

    def close(self) -> None:
        """Log the end marker, then detach and close the handler."""
        if self._handler is None:
            return
        self._logger.info("Package Manager End")
        self._handler.flush()
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
        if self._previous_level is not None:
            self._logger.setLevel(self._previous_level)

    def __enter__(self) -> RunLog:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None and self._handler is not None:
            self._logger.error("Run aborted: %s", exc)
        self.close()


__all__ = ["LOG_FILE_PREFIX", "PACKAGE_LOGGER", "RunLog", "log_file_name"]
