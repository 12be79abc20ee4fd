"""
核心模块

提供枚举与类型常量。校验函数位于 core.validators。
"""

from .types import (
    MenuCategory,
    Size,
    IceLevel,
    SugarLevel,
    AddOn,
    PaymentMethod,
    PaymentStatus,
    ProductionStatus,
    ChatMode,
)

__all__ = [
    "MenuCategory",
    "Size",
    "IceLevel",
    "SugarLevel",
    "AddOn",
    "PaymentMethod",
    "PaymentStatus",
    "ProductionStatus",
    "ChatMode",
]
