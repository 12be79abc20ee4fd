"""会话数据模型"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.types import ChatMode
from .order import Order
from .payment import PaymentRecord


@dataclass
class OrderSession:
    """单次对话的上下文

    保存对话历史与当前订单生命周期（订单、支付记录）。一轮生命周期完成
    （转单给制作部门）后调用 reset_lifecycle 清空订单状态，历史保留。
    """
    mode: ChatMode = ChatMode.TOOLS
    session_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    messages: List[Dict[str, Any]] = field(default_factory=list)
    current_order: Optional[Order] = None
    current_payment: Optional[PaymentRecord] = None
    pending_total: Optional[float] = None
    completed_orders: int = 0

    def add_message(self, role: str, content: str, **extra: Any):
        message = {"role": role, "content": content}
        message.update(extra)
        self.messages.append(message)

    @property
    def awaiting_payment(self) -> bool:
        return self.current_order is not None and self.current_payment is None

    def reset_lifecycle(self, completed: bool = True):
        """清空当前订单与支付记录"""
        self.current_order = None
        self.current_payment = None
        self.pending_total = None
        if completed:
            self.completed_orders += 1
