"""
服务装配

根据配置创建菜单、存储与各业务服务。
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config import Settings, get_settings
from infrastructure.store import (
    JsonRecordStore, OrderRepository, PaymentRepository, ProductionRepository
)
from models.menu import MenuCatalog
from .chat_client import ChatClient
from .order_service import OrderService
from .ordering_assistant import OrderingAssistant
from .payment_processor import PaymentProcessor
from .production_scheduler import ProductionScheduler

logger = logging.getLogger(__name__)


@dataclass
class ServiceBundle:
    """订单生命周期所需的服务集合"""
    settings: Settings
    catalog: MenuCatalog
    order_service: OrderService
    payment_processor: PaymentProcessor
    scheduler: ProductionScheduler


def create_services(settings: Optional[Settings] = None) -> ServiceBundle:
    """创建业务服务（不连接模型）

    Raises:
        CatalogLoadError: 菜单无法加载
    """
    settings = settings or get_settings()
    storage = settings.storage

    catalog = MenuCatalog.load(storage.menu_path)
    order_service = OrderService(catalog, OrderRepository(JsonRecordStore(storage.orders_path)))
    payment_processor = PaymentProcessor(
        PaymentRepository(JsonRecordStore(storage.payments_path)),
        catalog=catalog,
        strict_amount=settings.payment.strict_amount
    )
    scheduler = ProductionScheduler(ProductionRepository(JsonRecordStore(storage.production_path)))

    logger.info(f"服务已装配: data_dir={storage.data_dir}, strict_amount={settings.payment.strict_amount}")
    return ServiceBundle(
        settings=settings,
        catalog=catalog,
        order_service=order_service,
        payment_processor=payment_processor,
        scheduler=scheduler,
    )


def create_assistant(
    bundle: ServiceBundle,
    client: Optional[ChatClient] = None
) -> OrderingAssistant:
    """创建点单助手"""
    llm = bundle.settings.llm
    return OrderingAssistant(
        client=client or ChatClient(llm),
        catalog=bundle.catalog,
        order_service=bundle.order_service,
        payment_processor=bundle.payment_processor,
        scheduler=bundle.scheduler,
        text_model=llm.chat_model,
    )
