"""支付处理"""

import math
import logging
from numbers import Real
from typing import Any, Callable, Optional

from core.types import PAYMENT_METHODS, PaymentStatus
from infrastructure.exceptions import (
    InvalidPaymentMethodError,
    InvalidAmountError,
    AmountMismatchError,
    MissingOrderError,
)
from infrastructure.monitoring import get_structured_logger
from infrastructure.store import PaymentRepository
from models.menu import MenuCatalog
from models.order import Order, iso_timestamp
from models.payment import PaymentRecord, PaymentResult
from .pricing import calculate_total

logger = logging.getLogger(__name__)
events = get_structured_logger("drink_order.lifecycle")


def is_valid_payment_method(method: Any) -> bool:
    """验证支付方式"""
    return method in PAYMENT_METHODS


class PaymentProcessor:
    """支付处理器

    默认不核对支付金额与订单总额；strict_amount=True 时两者必须一致。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        catalog: Optional[MenuCatalog] = None,
        strict_amount: bool = False,
        clock: Callable[[], str] = iso_timestamp
    ):
        if strict_amount and catalog is None:
            raise ValueError("strict_amount 模式需要提供菜单")
        self.repository = repository
        self.catalog = catalog
        self.strict_amount = strict_amount
        self._clock = clock

    def process_payment(self, order: Optional[Order], method: Any, amount: Any) -> PaymentResult:
        """处理支付

        Raises:
            MissingOrderError: 没有订单
            InvalidPaymentMethodError: 支付方式无效
            InvalidAmountError: 金额不是有限正数
            AmountMismatchError: 严格模式下金额与总额不符
            PersistenceError: 写入失败
        """
        if order is None:
            raise MissingOrderError()

        if not is_valid_payment_method(method):
            raise InvalidPaymentMethodError(method, PAYMENT_METHODS)

        if (isinstance(amount, bool) or not isinstance(amount, Real)
                or not math.isfinite(amount) or amount <= 0):
            raise InvalidAmountError(amount)

        if self.strict_amount:
            expected = calculate_total(order, self.catalog)
            if amount != expected:
                raise AmountMismatchError(amount, expected)

        record = PaymentRecord(
            order_id=order.order_id,
            payment_method=method,
            amount=amount,
            order_details=order,
            status=PaymentStatus.COMPLETED.value,
            timestamp=self._clock(),
        )

        self.repository.add(record)
        events.log_event(
            "payment_completed",
            order_id=record.order_id,
            method=method,
            amount=amount
        )

        return PaymentResult(
            success=True,
            payment_record=record,
            message=f"支付成功！使用 {method} 支付 {amount} 元",
        )
