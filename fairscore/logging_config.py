"""
Logging Setup - Science Fair Evaluation Platform
fairscore/logging_config.py

Configures stdlib logging (services, routers) and structlog (scoring engine)
from LOG_LEVEL. Safe to call more than once.
"""

import logging

import structlog

from fairscore.config import settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
    _configured = True
