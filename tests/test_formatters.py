"""
终端显示格式化测试
"""

from formatters import (
    format_incomplete_order_message,
    format_menu,
    format_payment_choices,
    format_production_summary,
    format_statistics,
    format_time,
)
from core.types import PAYMENT_METHODS
from models.intent import IncompleteOrderIntent
from models.production import ProductionStats


class TestFormatters:
    """格式化函数测试"""

    def test_format_time_invalid(self):
        assert format_time("not a time") == "not a time"

    def test_incomplete_with_message(self):
        intent = IncompleteOrderIntent(missing=["甜度"], message="請問甜度呢？")
        assert format_incomplete_order_message(intent) == "❓ 請問甜度呢？\n"

    def test_incomplete_lists_missing(self):
        text = format_incomplete_order_message(IncompleteOrderIntent(missing=["大小", "冰塊"]))
        assert "  - 大小" in text
        assert "  - 冰塊" in text

    def test_empty_summary(self):
        assert format_production_summary([]) == "📭 目前沒有製作訂單"

    def test_statistics(self):
        text = format_statistics(ProductionStats(total=4, pending=1, in_progress=1, completed=2, cancelled=0))
        assert "完成率：50.0%" in text

    def test_payment_choices(self):
        text = format_payment_choices(PAYMENT_METHODS)
        assert "  1. Line Pay" in text
        assert "  4. 街口支付" in text

    def test_menu(self, catalog):
        text = format_menu(catalog)
        assert "🌸 季節限定" in text
        assert "阿薩姆紅茶  (M 35 / L 45)" in text
