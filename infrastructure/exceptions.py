"""
统一异常定义模块

按订单生命周期分层：校验、支付、转单、制作状态、持久化，以及模型服务错误。
"""

from typing import Optional, Dict, Any, List


class OrderSystemError(Exception):
    """系统异常基类"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式，用于工具调用结果"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ============ 订单校验错误 ============

class OrderValidationError(OrderSystemError):
    """订单字段校验失败"""

    field: str = ""

    def __init__(self, message: str, value: Any = None):
        super().__init__(
            message=message,
            details={"field": self.field, "value": value}
        )
        self.value = value


class UnknownItemError(OrderValidationError):
    """品项不在菜单中"""

    field = "item"

    def __init__(self, item: Any):
        super().__init__(f"無效的品項：{item}", item)


class InvalidSizeError(OrderValidationError):
    """杯型无效"""

    field = "size"

    def __init__(self, size: Any):
        super().__init__(f"無效的飲料大小：{size}", size)


class InvalidQuantityError(OrderValidationError):
    """数量无效（必须为正整数）"""

    field = "quantity"

    def __init__(self, quantity: Any):
        super().__init__(f"無效的數量：{quantity}", quantity)


class InvalidIceLevelError(OrderValidationError):
    """冰块选择无效"""

    field = "ice"

    def __init__(self, ice: Any):
        super().__init__(f"無效的冰塊選擇：{ice}", ice)


class InvalidSugarLevelError(OrderValidationError):
    """甜度选择无效"""

    field = "sugar"

    def __init__(self, sugar: Any):
        super().__init__(f"無效的甜度選擇：{sugar}", sugar)


# ============ 支付错误 ============

class PaymentError(OrderSystemError):
    """支付相关错误"""
    pass


class InvalidPaymentMethodError(PaymentError):
    """支付方式无效"""

    def __init__(self, method: Any, valid_methods: Optional[List[str]] = None):
        super().__init__(
            message=f"無效的支付方式：{method}",
            details={"method": method, "valid_methods": valid_methods or []}
        )


class InvalidAmountError(PaymentError):
    """支付金额无效"""

    def __init__(self, amount: Any):
        super().__init__(
            message=f"無效的支付金額：{amount}",
            details={"amount": amount}
        )


class AmountMismatchError(PaymentError):
    """支付金额与订单总额不符（仅严格模式）"""

    def __init__(self, amount: float, expected: float):
        super().__init__(
            message=f"支付金額 {amount} 與訂單總金額 {expected} 不符",
            details={"amount": amount, "expected": expected}
        )


class MissingOrderError(PaymentError):
    """当前会话没有可支付的订单"""

    def __init__(self, message: str = "找不到對應的訂單，請先建立訂單"):
        super().__init__(message=message)


# ============ 转单错误 ============

class TransferError(OrderSystemError):
    """转单给制作部门失败"""

    def __init__(self, message: str = "找不到對應的訂單或支付記錄"):
        super().__init__(message=message)


# ============ 制作状态错误 ============

class ProductionError(OrderSystemError):
    """制作订单相关错误"""
    pass


class UnknownOrderError(ProductionError):
    """制作订单不存在"""

    def __init__(self, order_id: str):
        super().__init__(
            message=f"找不到訂單：{order_id}",
            details={"order_id": order_id}
        )


class InvalidStatusError(ProductionError):
    """制作状态无效"""

    def __init__(self, status: Any, valid_statuses: Optional[List[str]] = None):
        super().__init__(
            message=f"無效的製作狀態：{status}",
            details={"status": status, "valid_statuses": valid_statuses or []}
        )


# ============ 持久化错误 ============

class PersistenceError(OrderSystemError):
    """记录存储读写错误"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message=message,
            details={"path": path} if path else {}
        )


class CatalogLoadError(PersistenceError):
    """菜单加载失败"""
    pass


# ============ 模型服务错误 ============

class IntentServiceError(OrderSystemError):
    """意图抽取（语言模型）服务错误"""
    pass


class ModelConnectionError(IntentServiceError):
    """无法连接模型服务"""

    def __init__(
        self,
        message: str = "無法連線到語言模型服務",
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            details={"original_error": str(original_error)} if original_error else {}
        )
        self.original_error = original_error


class ModelNotFoundError(IntentServiceError):
    """模型不存在

    本地模型服务中没有拉取指定模型。
    """

    def __init__(self, model_name: str):
        super().__init__(
            message=f"模型 '{model_name}' 不存在或不可用",
            details={"model": model_name}
        )


class ModelResponseError(IntentServiceError):
    """模型返回了无法处理的响应"""
    pass


def classify_openai_error(error: Exception, model_name: str = "") -> IntentServiceError:
    """将 OpenAI 库的异常转换为自定义异常

    Args:
        error: OpenAI 库抛出的异常
        model_name: 当前使用的模型名

    Returns:
        对应的自定义异常
    """
    error_name = type(error).__name__
    error_message = str(error)

    if error_name in ("APIConnectionError", "APITimeoutError"):
        return ModelConnectionError(message=error_message, original_error=error)
    if error_name == "NotFoundError":
        return ModelNotFoundError(model_name or error_message)

    # 根据 HTTP 状态码判断
    status_code = getattr(error, "status_code", None)
    if status_code == 404:
        return ModelNotFoundError(model_name or error_message)
    if status_code and 500 <= status_code < 600:
        return ModelConnectionError(message=error_message, original_error=error)

    return ModelResponseError(
        message=error_message,
        details={"error_type": error_name, "status_code": status_code}
    )
