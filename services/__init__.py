"""业务服务模块"""

from .pricing import calculate_total, calculate_line_total, UNKNOWN_ITEM_PRICE
from .order_service import OrderService
from .payment_processor import PaymentProcessor, is_valid_payment_method
from .production_scheduler import (
    ProductionScheduler, calculate_estimated_time, generate_production_notes
)
from .chat_client import ChatClient, ModelReply, ToolCall
from .ordering_assistant import OrderingAssistant, ToolDispatcher, TurnResult
from .bootstrap import ServiceBundle, create_services, create_assistant

__all__ = [
    "calculate_total",
    "calculate_line_total",
    "UNKNOWN_ITEM_PRICE",
    "OrderService",
    "PaymentProcessor",
    "is_valid_payment_method",
    "ProductionScheduler",
    "calculate_estimated_time",
    "generate_production_notes",
    "ChatClient",
    "ModelReply",
    "ToolCall",
    "OrderingAssistant",
    "ToolDispatcher",
    "TurnResult",
    "ServiceBundle",
    "create_services",
    "create_assistant",
]
