"""
测试公共夹具
"""

import itertools
from typing import Any, Dict, List, Optional

import pytest

from models.menu import MenuCatalog
from infrastructure.store import (
    JsonRecordStore, OrderRepository, PaymentRepository, ProductionRepository
)
from services.chat_client import ModelReply
from services.order_service import OrderService
from services.payment_processor import PaymentProcessor
from services.production_scheduler import ProductionScheduler


MENU_DATA = {
    "menu": {
        "tea": [
            {"name_zh": "茉莉綠茶", "name_en": "Jasmine Green Tea",
             "prices": {"M": 30, "L": 35}, "recommended": True},
            {"name_zh": "阿薩姆紅茶", "name_en": "Assam Black Tea",
             "prices": {"M": 35, "L": 45}},
            {"name_zh": "檸檬紅茶", "prices": {"M": 40, "L": 50}},
        ],
        "milk_tea": [
            {"name_zh": "珍珠奶茶", "prices": {"M": 50, "L": 60}, "recommended": True},
        ],
        "tea_latte": [
            {"name_zh": "紅茶拿鐵", "prices": {"M": 55, "L": 65}},
        ],
        "fresh_juice": [
            {"name_zh": "檸檬紅茶", "prices": {"M": 45, "L": 55}},
        ],
        "season_special": [
            {"name_zh": "芒果冰沙", "prices": {"L": 75}, "special": True},
        ],
    }
}


def make_clock():
    """每次调用返回递增的时间戳，保证订单 ID 唯一"""
    counter = itertools.count(1)
    return lambda: f"2024-05-01T08:00:{next(counter):02d}.000Z"


class FakeChatClient:
    """按顺序返回预设回复的模型客户端"""

    def __init__(self, replies: Optional[List[ModelReply]] = None):
        self.replies = list(replies or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *replies: ModelReply):
        self.replies.extend(replies)

    def chat(self, messages, tools=None, model=None) -> ModelReply:
        self.calls.append({
            "messages": [dict(m) for m in messages],
            "tools": tools,
            "model": model,
        })
        if not self.replies:
            return ModelReply(content="")
        return self.replies.pop(0)


@pytest.fixture
def catalog():
    return MenuCatalog.from_dict(MENU_DATA)


@pytest.fixture
def clock():
    return make_clock()


@pytest.fixture
def order_store(tmp_path):
    return JsonRecordStore(tmp_path / "orders.json")


@pytest.fixture
def payment_store(tmp_path):
    return JsonRecordStore(tmp_path / "payments.json")


@pytest.fixture
def production_store(tmp_path):
    return JsonRecordStore(tmp_path / "production.json")


@pytest.fixture
def order_service(catalog, order_store, clock):
    return OrderService(catalog, OrderRepository(order_store), clock=clock)


@pytest.fixture
def payment_processor(payment_store, clock):
    return PaymentProcessor(PaymentRepository(payment_store), clock=clock)


@pytest.fixture
def scheduler(production_store, clock):
    return ProductionScheduler(ProductionRepository(production_store), clock=clock)


@pytest.fixture
def fake_client():
    return FakeChatClient()
