"""意图抽取结果模型

语言模型每一轮的回复可能带有订单数据：完整订单、缺少字段的订单，或者没有。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class OrderFields:
    """候选订单字段（尚未校验）"""
    item: Optional[str] = None
    size: Optional[str] = None
    quantity: Any = None
    ice: Optional[str] = None
    sugar: Optional[str] = None
    add_on: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderFields":
        return cls(
            item=data.get("item"),
            size=data.get("size"),
            quantity=data.get("quantity"),
            ice=data.get("ice"),
            sugar=data.get("sugar"),
            add_on=data.get("addOn", data.get("add_on")),
        )


@dataclass(frozen=True)
class CompleteOrderIntent:
    """模型给出了完整订单"""
    order: OrderFields
    type: str = "complete"


@dataclass(frozen=True)
class IncompleteOrderIntent:
    """模型判断订单缺少字段，需要向顾客追问"""
    missing: List[str] = field(default_factory=list)
    message: Optional[str] = None
    order: Optional[OrderFields] = None
    type: str = "incomplete"


OrderIntent = Union[CompleteOrderIntent, IncompleteOrderIntent]
