"""
输入验证模块

提供订单字段校验与对话输入清理。
"""

import re
from typing import Any, TYPE_CHECKING

from infrastructure.exceptions import (
    UnknownItemError,
    InvalidSizeError,
    InvalidQuantityError,
    InvalidIceLevelError,
    InvalidSugarLevelError,
)
from .types import SIZES, ICE_LEVELS, SUGAR_LEVELS

if TYPE_CHECKING:
    from models.menu import MenuCatalog


MAX_TEXT_LENGTH = 2000


# ==================== 订单字段校验 ====================

def coerce_quantity(quantity: Any) -> int:
    """将数量转换为正整数

    接受 int 与纯数字字符串（模型常把数字当字符串返回），其余一律无效。
    """
    if isinstance(quantity, bool):
        raise InvalidQuantityError(quantity)
    if isinstance(quantity, int):
        value = quantity
    elif isinstance(quantity, float) and quantity.is_integer():
        value = int(quantity)
    elif isinstance(quantity, str) and re.fullmatch(r"\s*-?\d+\s*", quantity):
        value = int(quantity)
    else:
        raise InvalidQuantityError(quantity)

    if value <= 0:
        raise InvalidQuantityError(quantity)
    return value


def validate_order_fields(
    catalog: "MenuCatalog",
    item: Any,
    size: Any,
    quantity: Any,
    ice: Any,
    sugar: Any
) -> int:
    """校验订单字段，返回规范化后的数量

    数量最先检查：数量无效时无论其他字段如何都报数量错误。
    加料不做校验。
    """
    qty = coerce_quantity(quantity)

    if not isinstance(item, str) or not catalog.is_item_in_menu(item):
        raise UnknownItemError(item)

    if size not in SIZES:
        raise InvalidSizeError(size)

    if ice not in ICE_LEVELS:
        raise InvalidIceLevelError(ice)

    if sugar not in SUGAR_LEVELS:
        raise InvalidSugarLevelError(sugar)

    return qty


# ==================== 对话输入清理 ====================

def sanitize_text(text: str) -> str:
    """清理文本

    移除控制字符并标准化空白。
    """
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)
    text = ' '.join(text.split())
    return text[:MAX_TEXT_LENGTH]


def is_exit_command(text: str) -> bool:
    """是否为结束对话的指令"""
    return text.strip().lower() in ("exit", "quit")
