"""Tests for structured logging helpers."""
import json
import logging

from paperdesk.core.logging import (
    JsonFormatter,
    PrettyFormatter,
    RequestIdFilter,
    latency_bucket_ms,
    log_event,
    request_id_ctx_var,
)


def _record(msg="coupon.created", **extra):
    record = logging.LogRecord("paperdesk", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_filter_injects_context_request_id():
    token = request_id_ctx_var.set("rid-ctx")
    try:
        record = _record()
        RequestIdFilter().filter(record)
    finally:
        request_id_ctx_var.reset(token)
    assert record.request_id == "rid-ctx"


def test_filter_keeps_explicit_request_id():
    record = _record(request_id="rid-explicit")
    RequestIdFilter().filter(record)
    assert record.request_id == "rid-explicit"


def test_json_formatter_includes_extras():
    line = JsonFormatter().format(_record(request_id="rid-1", coupon_id="cp_1", count=3))
    payload = json.loads(line)
    assert payload["message"] == "coupon.created"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid-1"
    assert payload["coupon_id"] == "cp_1"
    assert payload["count"] == 3
    assert payload["timestamp"].endswith("Z")


def test_pretty_formatter_includes_rid_and_extras():
    line = PrettyFormatter().format(_record(request_id="rid-2", customer_id="cus_1"))
    assert "[rid=rid-2]" in line
    assert "coupon.created" in line
    assert "customer_id=cus_1" in line


def test_latency_buckets():
    assert latency_bucket_ms(None) == "unknown"
    assert latency_bucket_ms(3) == "<10ms"
    assert latency_bucket_ms(50) == "10-100ms"
    assert latency_bucket_ms(250) == "100-500ms"
    assert latency_bucket_ms(750) == "500-1000ms"
    assert latency_bucket_ms(4000) == ">=1000ms"


def test_log_event_truncates_extra(caplog):
    with caplog.at_level(logging.INFO, logger="paperdesk"):
        log_event("info", "email.batch_sent", customer_id="cus_1", extra={"body": "x" * 600})

    record = [r for r in caplog.records if r.getMessage() == "email.batch_sent"][-1]
    assert record.customer_id == "cus_1"
    assert record.body.endswith("...<truncated>")
    assert len(record.body) == 500 + len("...<truncated>")
