"""Logging setup: brief console output plus an optional per-session rotating log file"""
import glob
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

SESSION_LOGS_KEPT = 5
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB


def _cleanup_session_logs(log_path: Path, keep: int):
    """Delete old session logs so that at most `keep` remain after this session starts"""
    pattern = str(log_path.parent / f"{log_path.stem}_*.log")
    existing_logs = sorted(glob.glob(pattern), reverse=True)  # Newest first
    for old_log in existing_logs[keep - 1:]:
        try:
            Path(old_log).unlink()
        except OSError:
            logging.getLogger(__name__).debug(f"Could not remove old log file {old_log}")


def setup_logging(
    log_file: Optional[str] = "logs/docsearch.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Optional[Path]:
    """
    Configure root logging for the CLI and the search server.

    - Console (stdout): "LEVEL: message" at console_level
    - File: timestamped session log next to log_file, detailed format at
      file_level, rotated at 10MB; only the last 5 session logs are kept

    Args:
        log_file: Base log path; None disables file logging
        console_level: Console threshold (INFO = brief)
        file_level: File threshold (DEBUG = verbose)

    Returns:
        Path of this session's log file, or None without file logging
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers do the filtering
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(console_handler)

    session_log = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _cleanup_session_logs(log_path, SESSION_LOGS_KEPT)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

        file_handler = RotatingFileHandler(
            session_log,
            mode='a',
            maxBytes=MAX_LOG_BYTES,
            backupCount=10,
            encoding='utf-8'
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # Request lines from the server are noise on the console
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.debug(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={session_log or 'disabled'}"
    )
    return session_log
