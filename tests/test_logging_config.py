import json
import logging

from hpi_service.logging_config import HpiLogFilter, JSONFormatter, correlation_id, current_vrm


def _record(msg="HPI check complete"):
    return logging.LogRecord("hpi_service.api", logging.INFO, __file__, 1, msg, None, None)


def test_json_formatter_includes_request_context():
    cid_token = correlation_id.set("abc123")
    vrm_token = current_vrm.set("SD12LSC")
    try:
        record = _record()
        HpiLogFilter().filter(record)
        entry = json.loads(JSONFormatter().format(record))
    finally:
        correlation_id.reset(cid_token)
        current_vrm.reset(vrm_token)
    assert entry["message"] == "HPI check complete"
    assert entry["correlation_id"] == "abc123"
    assert entry["vrm"] == "SD12LSC"


def test_json_formatter_omits_empty_vrm():
    record = _record()
    HpiLogFilter().filter(record)
    entry = json.loads(JSONFormatter().format(record))
    assert "vrm" not in entry
    assert entry["level"] == "INFO"
