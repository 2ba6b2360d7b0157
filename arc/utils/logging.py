"""
Audit log of ARC point awards.

Awards are written at a custom EVENT level to a size-rotated file, one
line per credited creator, separate from the bt.logging console output.
"""

import os
import logging
from logging.handlers import RotatingFileHandler

EVENTS_LEVEL_NUM = 38
EVENTS_LOGGER_NAME = "arc.event"
DEFAULT_LOG_BACKUP_COUNT = 10
EVENT_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
EVENT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _event(self, message, *args, **kws):
    if self.isEnabledFor(EVENTS_LEVEL_NUM):
        self._log(EVENTS_LEVEL_NUM, message, args, **kws)


def _install_event_level() -> None:
    if logging.getLevelName(EVENTS_LEVEL_NUM) != "EVENT":
        logging.addLevelName(EVENTS_LEVEL_NUM, "EVENT")
    if getattr(logging.Logger, 'event', None) is not _event:
        logging.Logger.event = _event


def events_log_path(full_path, job_name=None):
    filename = f"events_{job_name}.log" if job_name is not None else "events.log"
    return os.path.abspath(os.path.join(full_path, filename))


def setup_events_logger(full_path, events_retention_size, job_name=None):
    """
    Get the events logger, attaching a rotating file handler for this job.

    Calling it again with the same directory and job name reuses the
    existing handler.

    Args:
        full_path: Directory for log files
        events_retention_size: Bytes per file before rotation
        job_name: Included in the filename as events_<job_name>.log
    """
    _install_event_level()

    logger = logging.getLogger(EVENTS_LOGGER_NAME)
    logger.setLevel(EVENTS_LEVEL_NUM)

    log_path = events_log_path(full_path, job_name)
    if any(getattr(h, 'baseFilename', None) == log_path for h in logger.handlers):
        return logger

    handler = RotatingFileHandler(log_path, maxBytes=events_retention_size, backupCount=DEFAULT_LOG_BACKUP_COUNT)
    handler.setLevel(EVENTS_LEVEL_NUM)
    handler.setFormatter(logging.Formatter(EVENT_FORMAT, datefmt=EVENT_DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def log_point_award(events_logger, arena_id, profile_id, handle, delta, total):
    """Record one creator's award; no-op without an events logger."""
    if events_logger is None:
        return
    events_logger.event(
        f"arena={arena_id} profile={profile_id} handle=@{handle} delta={delta} total={total}"
    )
