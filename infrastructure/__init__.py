"""基础设施模块"""

from .exceptions import (
    OrderSystemError,
    OrderValidationError,
    PaymentError,
    TransferError,
    ProductionError,
    PersistenceError,
    IntentServiceError,
)
from .monitoring import get_structured_logger, setup_logging, StructuredLogger
from .store import (
    JsonRecordStore, Repository, OrderRepository, PaymentRepository, ProductionRepository
)

__all__ = [
    # exceptions
    "OrderSystemError",
    "OrderValidationError",
    "PaymentError",
    "TransferError",
    "ProductionError",
    "PersistenceError",
    "IntentServiceError",
    # monitoring
    "get_structured_logger",
    "setup_logging",
    "StructuredLogger",
    # store
    "JsonRecordStore",
    "Repository",
    "OrderRepository",
    "PaymentRepository",
    "ProductionRepository",
]
