from __future__ import annotations

import logging
from unittest.mock import patch

from txrelay.logger import PendingLog, log_pending_messages, pend


def test_pend_accepts_level_names():
    assert pend("warning", "careful") == PendingLog(level=logging.WARNING, message="careful")
    assert pend(logging.ERROR, "bad").level == logging.ERROR


def test_log_pending_messages_tags_each_entry_with_name():
    err = RuntimeError("x")
    logs = [pend(logging.INFO, "one"), pend(logging.ERROR, "two", err)]

    with patch("txrelay.logger.log") as log:
        log_pending_messages("relay", logs)

    assert log.log.call_count == 2
    first, second = log.log.call_args_list
    assert first.args == (logging.INFO, "[%s] %s", "relay", "one")
    assert first.kwargs == {"exc_info": None}
    assert second.args == (logging.ERROR, "[%s] %s", "relay", "two")
    assert second.kwargs == {"exc_info": err}


def test_log_pending_messages_empty():
    with patch("txrelay.logger.log") as log:
        log_pending_messages("relay", [])
    log.log.assert_not_called()
