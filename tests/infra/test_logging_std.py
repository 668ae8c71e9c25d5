from __future__ import annotations

import json
import logging

import adbridge.infra.logging_std as ls


def test_import_has_no_side_effect_handlers() -> None:
    root = logging.getLogger()
    # pytest may attach handlers; assert we didn't ADD one.
    before = len(root.handlers)
    import importlib

    importlib.reload(ls)
    after = len(root.handlers)
    assert after == before


def test_configure_logging_idempotent() -> None:
    root = logging.getLogger()
    before = len(root.handlers)
    ls.configure_logging()
    after = len(root.handlers)
    # either unchanged (pytest already configured) or adds exactly 1 handler
    assert after == before or after == before + 1


def test_log_kv_redacts_tokens(caplog) -> None:
    logger = logging.getLogger("adbridge.test")
    with caplog.at_level(logging.INFO, logger="adbridge.test"):
        ls.log_kv(logger, "api.request", access_token="EAAB" + "x" * 40, step="create_campaign")
    line = caplog.records[-1].getMessage()
    assert "EAAB" not in line
    assert "step='create_campaign'" in line


def test_structured_formatter_nests_extra_data() -> None:
    record = logging.LogRecord("adbridge", logging.INFO, __file__, 1, "distribution.state", None, None)
    record.extra_data = {"platform": "meta", "state": "created"}
    out = json.loads(ls.StructuredFormatter().format(record))
    assert out["message"] == "distribution.state"
    assert out["fields"] == {"platform": "meta", "state": "created"}


def test_event_message_field_does_not_replace_the_log_message() -> None:
    record = logging.LogRecord("adbridge", logging.WARNING, __file__, 1, "api.error", None, None)
    record.extra_data = {"platform": "google", "message": "quota exceeded", "level": "x"}
    out = json.loads(ls.StructuredFormatter().format(record))
    assert out["message"] == "api.error"
    assert out["level"] == "WARNING"
    assert out["fields"]["message"] == "quota exceeded"
