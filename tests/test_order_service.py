"""
订单建立服务测试
"""

import re

import pytest

from infrastructure.exceptions import InvalidQuantityError, UnknownItemError
from models.order import iso_timestamp


class TestIsoTimestamp:
    """时间戳测试"""

    def test_format(self):
        """测试 UTC 毫秒精度格式"""
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", iso_timestamp())

    def test_strictly_increasing(self):
        """测试连续调用不重复且递增"""
        stamps = [iso_timestamp() for _ in range(200)]
        assert len(set(stamps)) == len(stamps)
        assert stamps == sorted(stamps)


class TestOrderService:
    """OrderService 测试"""

    def test_build_order(self, order_service, order_store):
        """测试建立订单并写入存储"""
        order = order_service.build_order("阿薩姆紅茶", "L", 2, "少冰", "半糖", "珍珠")

        assert order.item == "阿薩姆紅茶"
        assert order.quantity == 2
        assert order.add_on == "珍珠"
        assert order.status == "complete"
        assert order.order_id == order.timestamp

        rows = order_store.read_all()
        assert len(rows) == 1
        assert rows[0]["addOn"] == "珍珠"
        assert rows[0]["timestamp"] == order.order_id

    def test_string_quantity(self, order_service):
        """测试字符串数量被规整为整数"""
        order = order_service.build_order("阿薩姆紅茶", "M", "3", "去冰", "無糖")
        assert order.quantity == 3

    def test_add_on_not_validated(self, order_service):
        """测试加料不做校验"""
        order = order_service.build_order("阿薩姆紅茶", "M", 1, "去冰", "無糖", "仙草")
        assert order.add_on == "仙草"

    def test_invalid_order_not_stored(self, order_service, order_store):
        """测试校验失败不写入"""
        with pytest.raises(UnknownItemError):
            order_service.build_order("黑糖珍奶", "M", 1, "去冰", "無糖")
        assert order_store.read_all() == []

    def test_zero_quantity(self, order_service, order_store):
        """测试数量为 0"""
        with pytest.raises(InvalidQuantityError):
            order_service.build_order("阿薩姆紅茶", "M", 0, "去冰", "無糖")
        assert not order_store.path.exists()

    def test_non_utf8_store(self, order_service, order_store):
        """测试订单文件不是 UTF-8 时按空集合处理"""
        order_store.path.write_bytes(b"\xff\xfe[garbage")

        order = order_service.build_order("阿薩姆紅茶", "M", 2, "少冰", "半糖")

        assert [row["timestamp"] for row in order_store.read_all()] == [order.order_id]

    def test_unique_ids(self, order_service):
        """测试连续订单 ID 不重复"""
        first = order_service.build_order("阿薩姆紅茶", "M", 1, "去冰", "無糖")
        second = order_service.build_order("阿薩姆紅茶", "M", 1, "去冰", "無糖")
        assert first.order_id != second.order_id
