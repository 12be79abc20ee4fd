"""订单建立服务"""

import logging
from typing import Any, Callable, Optional

from core.validators import validate_order_fields
from infrastructure.monitoring import get_structured_logger
from infrastructure.store import OrderRepository
from models.menu import MenuCatalog
from models.order import Order, iso_timestamp

logger = logging.getLogger(__name__)
events = get_structured_logger("drink_order.lifecycle")


class OrderService:
    """校验订单字段、建立订单并追加到订单存储"""

    def __init__(
        self,
        catalog: MenuCatalog,
        repository: OrderRepository,
        clock: Callable[[], str] = iso_timestamp
    ):
        self.catalog = catalog
        self.repository = repository
        self._clock = clock

    def build_order(
        self,
        item: Any,
        size: Any,
        quantity: Any,
        ice: Any,
        sugar: Any,
        add_on: Optional[str] = None
    ) -> Order:
        """处理订单并写入存储

        Raises:
            OrderValidationError: 字段校验失败
            PersistenceError: 写入失败（订单视为未建立）
        """
        qty = validate_order_fields(self.catalog, item, size, quantity, ice, sugar)

        order = Order(
            item=item,
            size=size,
            quantity=qty,
            ice=ice,
            sugar=sugar,
            add_on=add_on,
            timestamp=self._clock(),
        )

        self.repository.add(order)
        events.log_event(
            "order_created",
            order_id=order.order_id,
            item=order.item,
            size=order.size,
            quantity=order.quantity
        )
        return order
