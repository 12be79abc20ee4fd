"""数据模型模块"""

from .menu import MenuEntry, MenuCatalog, ItemPriceInfo
from .order import Order, iso_timestamp
from .payment import PaymentRecord, PaymentResult
from .production import (
    ItemDetails, PaymentSummary, ProductionOrder, ProductionResult, ProductionStats
)
from .intent import OrderFields, CompleteOrderIntent, IncompleteOrderIntent, OrderIntent
from .session import OrderSession

__all__ = [
    "MenuEntry",
    "MenuCatalog",
    "ItemPriceInfo",
    "Order",
    "iso_timestamp",
    "PaymentRecord",
    "PaymentResult",
    "ItemDetails",
    "PaymentSummary",
    "ProductionOrder",
    "ProductionResult",
    "ProductionStats",
    "OrderFields",
    "CompleteOrderIntent",
    "IncompleteOrderIntent",
    "OrderIntent",
    "OrderSession",
]
