import json
import logging

from screenfind.logging_utils import MAX_ANCHORS_LOGGED, event_logger, log_event


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def _capture():
    handler = _Collect()
    event_logger.addHandler(handler)
    event_logger.setLevel(logging.INFO)
    return handler


def test_log_event_writes_json_line():
    handler = _capture()
    try:
        log_event("icon_located", {"icon": "ok.png", "matches": 1})
    finally:
        event_logger.removeHandler(handler)

    body = json.loads(handler.messages[-1])
    assert body == {"event": "icon_located", "icon": "ok.png", "matches": 1}


def test_log_event_truncates_long_anchor_lists():
    handler = _capture()
    try:
        log_event("icon_located", {"anchors": [(i, 0) for i in range(MAX_ANCHORS_LOGGED + 5)]})
    finally:
        event_logger.removeHandler(handler)

    body = json.loads(handler.messages[-1])
    assert len(body["anchors"]) == MAX_ANCHORS_LOGGED + 1
    assert body["anchors"][-1] == "...<5 more>"
