from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

# Structured event logger configured in logging_setup.
event_logger = logging.getLogger("screenfind.events")

MAX_ANCHORS_LOGGED = 50


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {key: _sanitize(val) for key, val in obj.items()}
    if isinstance(obj, (list, tuple)):
        items = [_sanitize(item) for item in obj[:MAX_ANCHORS_LOGGED]]
        if len(obj) > MAX_ANCHORS_LOGGED:
            items.append(f"...<{len(obj) - MAX_ANCHORS_LOGGED} more>")
        return items
    return obj


def log_event(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    """Log a structured event as one JSON line; never raise."""
    body: Dict[str, Any] = {"event": event}
    if payload:
        body.update(_sanitize(payload))
    try:
        event_logger.info(json.dumps(body, ensure_ascii=True, default=str))
    except Exception:  # noqa: BLE001
        event_logger.info(f"{event} {body}")
