"""
结构化日志测试
"""

import json
import logging

from infrastructure.monitoring import (
    SensitiveDataFilter,
    StructuredFormatter,
    get_structured_logger,
)


def make_record(message, **extra):
    record = logging.LogRecord(
        name="drink_order.lifecycle", level=logging.INFO, pathname=__file__,
        lineno=1, msg=message, args=None, exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """结构化格式测试"""

    def test_json_output(self):
        record = make_record("order_created", extra_data={"item": "阿薩姆紅茶", "quantity": 2})

        data = json.loads(StructuredFormatter("test-service").format(record))

        assert data["message"] == "order_created"
        assert data["service"] == "test-service"
        assert data["level"] == "INFO"
        assert data["data"] == {"item": "阿薩姆紅茶", "quantity": 2}


class TestSensitiveDataFilter:
    """敏感信息过滤测试"""

    def test_mask_api_key(self):
        assert SensitiveDataFilter.mask("api_key=abc123") == "api_key=****"

    def test_mask_sk_token(self):
        assert "sk-abcdef" not in SensitiveDataFilter.mask("using sk-abcdef")

    def test_filter_rewrites_message(self):
        record = make_record("token: xyz789")
        assert SensitiveDataFilter().filter(record) is True
        assert "xyz789" not in record.getMessage()

    def test_plain_message_untouched(self):
        record = make_record("訂單已建立")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "訂單已建立"


class TestStructuredLogger:
    """生命周期事件测试"""

    def test_log_event(self, caplog):
        events = get_structured_logger("drink_order.lifecycle")
        with caplog.at_level(logging.INFO, logger="drink_order.lifecycle"):
            events.log_event("payment_completed", order_id="2024-05-01T08:00:01.000Z", amount=90)

        record = caplog.records[-1]
        assert record.getMessage() == "payment_completed"
        assert record.extra_data == {"order_id": "2024-05-01T08:00:01.000Z", "amount": 90}

    def test_log_error(self, caplog):
        """测试错误记录包含异常类型与上下文"""
        events = get_structured_logger("drink_order.session")
        with caplog.at_level(logging.ERROR, logger="drink_order.session"):
            events.log_error(ValueError("無效的數量：0"), {"session_id": "abc123"})

        record = caplog.records[-1]
        assert record.getMessage() == "error_occurred"
        assert record.extra_data == {
            "error_type": "ValueError",
            "error_message": "無效的數量：0",
            "context": {"session_id": "abc123"},
        }
