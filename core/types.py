"""
核心类型定义

提供系统中使用的枚举和类型常量。枚举值与菜单数据、持久化文件中的字符串保持一致。
"""

from enum import Enum
from typing import List


class MenuCategory(str, Enum):
    """菜单分类（顺序即查价顺序）"""
    TEA = "tea"
    MILK_TEA = "milk_tea"
    TEA_LATTE = "tea_latte"
    FRESH_JUICE = "fresh_juice"
    SEASON_SPECIAL = "season_special"


class Size(str, Enum):
    """杯型枚举"""
    MEDIUM = "M"
    LARGE = "L"


class IceLevel(str, Enum):
    """冰块枚举"""
    HOT = "溫熱飲"
    NO_ICE = "去冰"
    LIGHT_ICE = "微冰"
    LESS_ICE = "少冰"
    NORMAL_ICE = "正常冰"


class SugarLevel(str, Enum):
    """甜度枚举"""
    NO_SUGAR = "無糖"
    LIGHT_SUGAR = "微糖"
    HALF_SUGAR = "半糖"
    LESS_SUGAR = "少糖"
    FULL_SUGAR = "全糖"


class AddOn(str, Enum):
    """加料枚举（仅用于提示词与工具 schema，下单时不校验）"""
    BOBA = "波霸"
    PEARL = "珍珠"
    OAT = "燕麥"
    COCONUT = "椰果"


class PaymentMethod(str, Enum):
    """支付方式枚举"""
    LINE_PAY = "Line Pay"
    CASH = "現金"
    CREDIT_CARD = "信用卡"
    JKO_PAY = "街口支付"


class PaymentStatus(str, Enum):
    """支付状态枚举

    目前只会产生 COMPLETED，其余取值保留给存量数据。
    """
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ProductionStatus(str, Enum):
    """制作状态枚举（任意状态之间均可转换）"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """检查状态是否有效"""
        return value in cls.values()

    @classmethod
    def values(cls) -> List[str]:
        return [s.value for s in cls]


class ChatMode(str, Enum):
    """对话模式"""
    TOOLS = "tools"  # function calling
    TEXT = "text"    # 回复中内嵌 JSON


ORDER_STATUS_COMPLETE = "complete"
PRODUCTION_PRIORITY_NORMAL = "normal"

SIZES = [s.value for s in Size]
ICE_LEVELS = [i.value for i in IceLevel]
SUGAR_LEVELS = [s.value for s in SugarLevel]
ADD_ONS = [a.value for a in AddOn]
PAYMENT_METHODS = [m.value for m in PaymentMethod]
CATEGORY_ORDER = list(MenuCategory)
