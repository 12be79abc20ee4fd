"""制作订单数据模型"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.types import ProductionStatus, PRODUCTION_PRIORITY_NORMAL
from .order import Order, iso_timestamp
from .payment import PaymentRecord


@dataclass(frozen=True)
class ItemDetails:
    """饮品规格"""
    item: str
    size: str
    quantity: int
    ice: str
    sugar: str
    add_on: Optional[str] = None

    @classmethod
    def from_order(cls, order: Order) -> "ItemDetails":
        return cls(
            item=order.item,
            size=order.size,
            quantity=order.quantity,
            ice=order.ice,
            sugar=order.sugar,
            add_on=order.add_on,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": self.item,
            "size": self.size,
            "quantity": self.quantity,
            "ice": self.ice,
            "sugar": self.sugar,
            "addOn": self.add_on,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemDetails":
        return cls(
            item=data["item"],
            size=data["size"],
            quantity=data["quantity"],
            ice=data["ice"],
            sugar=data["sugar"],
            add_on=data.get("addOn"),
        )


@dataclass(frozen=True)
class PaymentSummary:
    """支付摘要"""
    method: str
    amount: float
    status: str

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentSummary":
        return cls(method=record.payment_method, amount=record.amount, status=record.status)

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "amount": self.amount, "status": self.status}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentSummary":
        return cls(method=data["method"], amount=data["amount"], status=data["status"])


@dataclass(frozen=True)
class ProductionOrder:
    """制作订单

    状态更新直接修改存储中的原始记录，见 ProductionScheduler.update_status。
    """
    order_id: str
    order_details: ItemDetails
    payment_info: PaymentSummary
    estimated_time: int
    notes: str = ""
    status: str = ProductionStatus.PENDING.value
    priority: str = PRODUCTION_PRIORITY_NORMAL
    timestamp: str = field(default_factory=iso_timestamp)
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "orderId": self.order_id,
            "timestamp": self.timestamp,
            "status": self.status,
            "priority": self.priority,
            "orderDetails": self.order_details.to_dict(),
            "paymentInfo": self.payment_info.to_dict(),
            "estimatedTime": self.estimated_time,
            "notes": self.notes,
        }
        if self.last_updated is not None:
            data["lastUpdated"] = self.last_updated
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductionOrder":
        return cls(
            order_id=data["orderId"],
            order_details=ItemDetails.from_dict(data["orderDetails"]),
            payment_info=PaymentSummary.from_dict(data["paymentInfo"]),
            estimated_time=data["estimatedTime"],
            notes=data.get("notes", ""),
            status=data["status"],
            priority=data.get("priority", PRODUCTION_PRIORITY_NORMAL),
            timestamp=data["timestamp"],
            last_updated=data.get("lastUpdated"),
        )


@dataclass
class ProductionResult:
    """转单结果"""
    success: bool
    production_order: ProductionOrder
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "productionOrder": self.production_order.to_dict(),
            "message": self.message,
        }


@dataclass(frozen=True)
class ProductionStats:
    """制作部门统计"""
    total: int
    pending: int
    in_progress: int
    completed: int
    cancelled: int

    @property
    def completion_rate(self) -> float:
        """完成率（百分比，一位小数）"""
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 1)
