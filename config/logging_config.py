"""Logging setup: console, a rotating studio log and a delegate call log."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

STUDIO_LOG = "ebookstudio.log"
DELEGATE_LOG = "llm_calls.log"

# Transport loggers whose traffic is also written to DELEGATE_LOG
_DELEGATE_LOGGERS = ("tools.agent_sdk_client", "tools.media_client")

# Chatty third-party loggers, capped at WARNING
_QUIET_LOGGERS = ("claude_agent_sdk", "google_genai", "httpx", "httpcore")


def _rotating(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(str(path), maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str | Path] = None,
    console_enabled: bool = True,
) -> Path:
    """Configure the root logger and the delegate call log.

    Safe to call more than once: previously installed handlers are replaced.

    Args:
        level: Level for the console and the studio log.
        log_dir: Directory for log files. Defaults to ./data/logs.
        console_enabled: Also log to stderr. Off while the console UI owns
            the terminal.

    Returns:
        The directory the log files are written to.
    """
    log_dir = Path(log_dir or "./data/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    if console_enabled:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        root.addHandler(console)
    root.addHandler(_rotating(log_dir / STUDIO_LOG, level, formatter))

    # Delegate traffic is kept at DEBUG regardless of the console level
    delegate_handler = _rotating(log_dir / DELEGATE_LOG, logging.DEBUG, formatter)
    for name in _DELEGATE_LOGGERS:
        delegate_logger = logging.getLogger(name)
        delegate_logger.setLevel(logging.DEBUG)
        for handler in list(delegate_logger.handlers):
            delegate_logger.removeHandler(handler)
            handler.close()
        delegate_logger.addHandler(delegate_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging initialized: level=%s, dir=%s", level, log_dir)
    return log_dir
