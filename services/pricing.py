"""订单计价"""

import logging
from typing import Any

from models.menu import MenuCatalog

logger = logging.getLogger(__name__)

# 品项不在菜单（或没有该杯型价格）时使用的单价
UNKNOWN_ITEM_PRICE = 0


def calculate_line_total(item: str, size: str, quantity: Any, catalog: MenuCatalog) -> float:
    """单价 × 数量

    按分类顺序取第一个同名品项的价格；找不到时单价为 UNKNOWN_ITEM_PRICE，
    不抛异常。品项、杯型不是字符串时同样视为找不到。
    """
    entry = catalog.find(item) if isinstance(item, str) else None
    if entry is None:
        logger.info(f"品项 {item!r} 不在菜单中，单价按 {UNKNOWN_ITEM_PRICE} 计算")
        unit_price = UNKNOWN_ITEM_PRICE
    else:
        unit_price = entry.price_for(size) if isinstance(size, str) else None
        if unit_price is None:
            logger.info(f"品项 {item!r} 没有 {size!r} 杯型价格，单价按 {UNKNOWN_ITEM_PRICE} 计算")
            unit_price = UNKNOWN_ITEM_PRICE

    return unit_price * quantity


def calculate_total(order: Any, catalog: MenuCatalog) -> float:
    """计算订单总金额

    order 只需要 item / size / quantity 三个属性。
    """
    return calculate_line_total(order.item, order.size, order.quantity, catalog)
