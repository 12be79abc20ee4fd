"""支付数据模型"""

from dataclasses import dataclass, field
from typing import Any, Dict

from core.types import PaymentStatus
from .order import Order, iso_timestamp


@dataclass(frozen=True)
class PaymentRecord:
    """支付记录，每笔订单一条"""
    order_id: str
    payment_method: str
    amount: float
    order_details: Order
    status: str = PaymentStatus.COMPLETED.value
    timestamp: str = field(default_factory=iso_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orderId": self.order_id,
            "timestamp": self.timestamp,
            "paymentMethod": self.payment_method,
            "amount": self.amount,
            "status": self.status,
            "orderDetails": self.order_details.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentRecord":
        return cls(
            order_id=data["orderId"],
            payment_method=data["paymentMethod"],
            amount=data["amount"],
            order_details=Order.from_dict(data["orderDetails"]),
            status=data.get("status", PaymentStatus.COMPLETED.value),
            timestamp=data["timestamp"],
        )


@dataclass
class PaymentResult:
    """支付结果"""
    success: bool
    payment_record: PaymentRecord
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "paymentRecord": self.payment_record.to_dict(),
            "message": self.message,
        }
