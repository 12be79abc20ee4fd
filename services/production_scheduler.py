"""制作部门转单与状态管理"""

import math
import logging
from typing import Any, Callable, List, Optional

from core.types import IceLevel, SugarLevel, ProductionStatus, PRODUCTION_PRIORITY_NORMAL
from infrastructure.exceptions import TransferError, UnknownOrderError, InvalidStatusError
from infrastructure.monitoring import get_structured_logger
from infrastructure.store import ProductionRepository
from models.order import Order, iso_timestamp
from models.payment import PaymentRecord
from models.production import (
    ItemDetails, PaymentSummary, ProductionOrder, ProductionResult, ProductionStats
)

logger = logging.getLogger(__name__)
events = get_structured_logger("drink_order.lifecycle")

BASE_MINUTES = 3.0
EXTRA_CUP_MINUTES = 1.5
ADD_ON_MINUTES = 0.5
HOT_DRINK_MINUTES = 1.0
BULK_ORDER_THRESHOLD = 3


def raw_estimated_minutes(order: Any) -> float:
    """预估制作时间（未取整）"""
    minutes = BASE_MINUTES

    if order.quantity > 1:
        minutes += (order.quantity - 1) * EXTRA_CUP_MINUTES

    if order.add_on:
        minutes += ADD_ON_MINUTES

    if order.ice == IceLevel.HOT.value:
        minutes += HOT_DRINK_MINUTES

    return minutes


def calculate_estimated_time(order: Any) -> int:
    """预估制作时间（分钟，向上取整）"""
    return math.ceil(raw_estimated_minutes(order))


def generate_production_notes(order: Any) -> str:
    """生成制作备注，多条以 " | " 连接"""
    notes = []

    if order.ice == IceLevel.HOT.value:
        notes.append("⚠️ 溫熱飲，請注意溫度")

    if order.sugar == SugarLevel.NO_SUGAR.value:
        notes.append("🍃 無糖飲品")

    if order.add_on:
        notes.append(f"➕ 添加：{order.add_on}")

    if order.quantity > BULK_ORDER_THRESHOLD:
        notes.append(f"📦 大量訂單：{order.quantity} 杯")

    return " | ".join(notes)


class ProductionScheduler:
    """制作部门队列

    转单时追加制作订单；状态可在任意取值之间切换，不限制转换路径。
    """

    def __init__(
        self,
        repository: ProductionRepository,
        clock: Callable[[], str] = iso_timestamp
    ):
        self.repository = repository
        self._clock = clock

    def transfer_to_production(
        self,
        order: Optional[Order],
        payment_record: Optional[PaymentRecord]
    ) -> ProductionResult:
        """将已支付的订单转给制作部门

        Raises:
            TransferError: 缺少订单或支付记录
            PersistenceError: 写入失败
        """
        if order is None or payment_record is None:
            raise TransferError()

        production_order = ProductionOrder(
            order_id=order.order_id,
            order_details=ItemDetails.from_order(order),
            payment_info=PaymentSummary.from_record(payment_record),
            estimated_time=calculate_estimated_time(order),
            notes=generate_production_notes(order),
            status=ProductionStatus.PENDING.value,
            priority=PRODUCTION_PRIORITY_NORMAL,
            timestamp=self._clock(),
        )

        self.repository.add(production_order)
        events.log_event(
            "production_transferred",
            order_id=production_order.order_id,
            estimated_time=production_order.estimated_time
        )

        return ProductionResult(
            success=True,
            production_order=production_order,
            message="訂單已成功轉給製作部門！",
        )

    def update_status(self, order_id: str, new_status: Any) -> str:
        """更新制作订单状态，返回结果消息

        找不到订单时不写入存储。

        Raises:
            InvalidStatusError: 状态无效
            UnknownOrderError: 订单不存在
            PersistenceError: 写入失败
        """
        if not ProductionStatus.is_valid(new_status):
            raise InvalidStatusError(new_status, ProductionStatus.values())

        previous = self.repository.update_fields(
            order_id, {"status": new_status, "lastUpdated": self._clock()}
        )
        if previous is None:
            raise UnknownOrderError(order_id)

        events.log_event(
            "production_status_updated",
            order_id=order_id,
            old_status=previous.get("status"),
            new_status=new_status
        )
        return f"訂單 {order_id} 狀態已更新為 {new_status}"

    def list_orders(self) -> List[ProductionOrder]:
        return self.repository.list_all()

    def get_order(self, order_id: str) -> Optional[ProductionOrder]:
        return self.repository.find(order_id)

    def pending_orders(self) -> List[ProductionOrder]:
        return [o for o in self.list_orders() if o.status == ProductionStatus.PENDING.value]

    def statistics(self) -> ProductionStats:
        """制作部门统计"""
        orders = self.list_orders()

        def count(status: ProductionStatus) -> int:
            return sum(1 for o in orders if o.status == status.value)

        return ProductionStats(
            total=len(orders),
            pending=count(ProductionStatus.PENDING),
            in_progress=count(ProductionStatus.IN_PROGRESS),
            completed=count(ProductionStatus.COMPLETED),
            cancelled=count(ProductionStatus.CANCELLED),
        )
