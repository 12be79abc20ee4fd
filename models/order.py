"""订单数据模型"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from core.types import ORDER_STATUS_COMPLETE


_last_issued: Optional[datetime] = None


def iso_timestamp() -> str:
    """UTC ISO-8601 时间戳（毫秒精度），同时用作订单 ID

    同一毫秒内多次调用时顺延 1 毫秒，保证本进程内严格递增、不重复。
    """
    global _last_issued
    now = datetime.now(timezone.utc)
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    if _last_issued is not None and now <= _last_issued:
        now = _last_issued + timedelta(milliseconds=1)
    _last_issued = now
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Order:
    """订单

    建立后不可变。创建时间戳即订单 ID，支付记录与制作订单都以它关联。
    """
    item: str
    size: str
    quantity: int
    ice: str
    sugar: str
    add_on: Optional[str] = None
    status: str = ORDER_STATUS_COMPLETE
    timestamp: str = field(default_factory=iso_timestamp)

    @property
    def order_id(self) -> str:
        return self.timestamp

    @property
    def created_at(self) -> str:
        return self.timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "item": self.item,
            "size": self.size,
            "quantity": self.quantity,
            "ice": self.ice,
            "sugar": self.sugar,
            "addOn": self.add_on,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            item=data["item"],
            size=data["size"],
            quantity=data["quantity"],
            ice=data["ice"],
            sugar=data["sugar"],
            add_on=data.get("addOn"),
            status=data.get("status", ORDER_STATUS_COMPLETE),
            timestamp=data["timestamp"],
        )
