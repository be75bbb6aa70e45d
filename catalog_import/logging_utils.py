"""
catalog_import/logging_utils.py

JSON log lines for validation runs, one object per event, so run summaries
can be filtered by `event` and aggregated by count fields.
"""

from __future__ import annotations

import json
import logging
from typing import Any


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Log `event` with `fields` as one sorted-key JSON object.

    Nothing is serialized when `level` is disabled for `logger`; values JSON
    cannot encode are rendered with `str`.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
