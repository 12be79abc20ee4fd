"""工具调用参数模型

只做类型层面的规整（字符串数字转数值、空字符串转 None 等），取值范围交给
订单、支付服务校验，以便返回具体的业务错误。
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_NULL_LIKE = {"", "null", "none", "無", "不加", "没有", "沒有"}


class ToolArgs(BaseModel):
    """工具参数基类"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CalculateTotalArgs(ToolArgs):
    """calculate_total 参数"""
    item: Any = None
    size: Any = None
    quantity: Any = None


class ProcessOrderArgs(ToolArgs):
    """process_order 参数"""
    item: Any = None
    size: Any = None
    quantity: Any = None
    ice: Any = None
    sugar: Any = None
    add_on: Optional[str] = Field(default=None, alias="addOn")

    @field_validator('add_on', mode='before')
    @classmethod
    def normalize_add_on(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        if v.lower() in _NULL_LIKE:
            return None
        return v


class ProcessPaymentArgs(ToolArgs):
    """process_payment 参数"""
    order_id: Any = Field(default=None, alias="orderId")
    payment_method: Any = Field(default=None, alias="paymentMethod")
    amount: Any = None

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return float(v.strip())
            except ValueError:
                return v
        return v


class TransferArgs(ToolArgs):
    """transfer_to_production 参数"""
    order_id: Any = Field(default=None, alias="orderId")
    payment_record_id: Any = Field(default=None, alias="paymentRecordId")
