# src/config/logging_config.py

"""Per-run timestamped logging configuration for the restock tracker.

Each run creates a dedicated log file inside ``logs/``, named with the
launch timestamp (e.g. ``logs/run_20261019_153045.log``).  All
``restock_tracker.*`` loggers route through this file handler so that
every module's output lands in the same per-run log.

Old run logs are pruned on setup: anything older than
``Settings.LOG_RETENTION_DAYS`` goes, and at most
``Settings.MAX_LOG_FILES`` previous runs are kept.
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

# Reusable format strings --------------------------------------------------

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RUN_LOG_GLOB = "run_*.log"


def prune_old_logs(
    logs_dir: Path,
    keep: int,
    max_age_days: int,
    now: float | None = None,
) -> list[Path]:
    """Delete stale run logs from *logs_dir*.

    A log is removed when it is older than *max_age_days* or when it
    falls outside the *keep* most recent files.

    Returns:
        The paths that were deleted.
    """
    now = time.time() if now is None else now
    cutoff = now - max_age_days * 86400

    logs = sorted(
        logs_dir.glob(_RUN_LOG_GLOB),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )
    removed: list[Path] = []
    for idx, path in enumerate(logs):
        if idx >= keep or path.stat().st_mtime < cutoff:
            try:
                path.unlink()
                removed.append(path)
            except OSError:
                continue
    return removed


def setup_logging() -> Path:
    """Initialise the root ``restock_tracker`` logger for the current run.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    # --- Root project logger -----------------------------------------------
    root_logger = logging.getLogger("restock_tracker")
    root_logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if root_logger.handlers:
        return log_file

    removed = prune_old_logs(
        logs_dir,
        keep=Settings.MAX_LOG_FILES,
        max_age_days=Settings.LOG_RETENTION_DAYS,
    )

    # --- File handler (DEBUG+) – captures everything -----------------------
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    # --- Console handler (INFO+) – scheduler captures stderr ---------------
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging initialised — log file: %s", log_file
    )
    if removed:
        root_logger.debug("Pruned %d old run log(s)", len(removed))

    return log_file
