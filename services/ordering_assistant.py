"""点单对话助手

每一轮对话：用户消息 → 模型 → （工具调用 / 回复中的订单 JSON）→ 订单生命周期。
订单状态保存在 OrderSession 中，一轮生命周期完成后重置。
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from core.types import ChatMode, PAYMENT_METHODS
from core.validators import coerce_quantity, sanitize_text
from infrastructure.exceptions import OrderSystemError, MissingOrderError
from models.intent import CompleteOrderIntent, IncompleteOrderIntent, OrderIntent
from models.menu import MenuCatalog
from models.order import Order
from models.payment import PaymentRecord
from models.production import ProductionOrder
from models.session import OrderSession
from nlp.extractor import parse_order_response
from nlp.prompts import TOOL_SCHEMAS, build_system_prompt
from nlp.tool_args import (
    CalculateTotalArgs, ProcessOrderArgs, ProcessPaymentArgs, TransferArgs
)
from .chat_client import ToolCall
from .order_service import OrderService
from .payment_processor import PaymentProcessor
from .pricing import calculate_line_total, calculate_total
from .production_scheduler import ProductionScheduler

if TYPE_CHECKING:
    from .chat_client import ChatClient

logger = logging.getLogger(__name__)


def payment_method_by_choice(choice: str) -> Optional[str]:
    """按编号（从 1 开始）选择支付方式"""
    try:
        index = int(choice.strip()) - 1
    except (AttributeError, ValueError):
        return None
    if 0 <= index < len(PAYMENT_METHODS):
        return PAYMENT_METHODS[index]
    return None


@dataclass
class TurnResult:
    """一轮对话的处理结果，由界面层负责显示"""
    replies: List[str] = field(default_factory=list)
    order: Optional[Order] = None
    total: Optional[float] = None
    payment: Optional[PaymentRecord] = None
    production_order: Optional[ProductionOrder] = None
    incomplete: Optional[IncompleteOrderIntent] = None
    errors: List[str] = field(default_factory=list)
    tool_results: List[Dict[str, Any]] = field(default_factory=list)
    awaiting_payment: bool = False
    completed: bool = False


class ToolDispatcher:
    """执行模型发起的工具调用

    业务错误不会抛出，而是作为 {"success": false, "error": ...} 交还给模型。
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        order_service: OrderService,
        payment_processor: PaymentProcessor,
        scheduler: ProductionScheduler
    ):
        self.catalog = catalog
        self.order_service = order_service
        self.payment_processor = payment_processor
        self.scheduler = scheduler
        self._handlers = {
            "calculate_total": self._calculate_total,
            "process_order": self._process_order,
            "process_payment": self._process_payment,
            "transfer_to_production": self._transfer_to_production,
        }

    def dispatch(self, session: OrderSession, call: ToolCall, turn: TurnResult) -> Dict[str, Any]:
        """执行单个工具调用，返回 tool 消息"""
        handler = self._handlers.get(call.name)
        if handler is None:
            result = {"success": False, "error": f"未知的工具：{call.name}"}
        else:
            try:
                result = handler(session, call.arguments, turn)
            except OrderSystemError as e:
                logger.info(f"工具 {call.name} 执行失败: {e.message}")
                turn.errors.append(e.message)
                result = {"success": False, "error": e.message}

        turn.tool_results.append({"name": call.name, **result})
        return {
            "role": "tool",
            "tool_call_id": call.id,
            "content": json.dumps(result, ensure_ascii=False),
        }

    def _calculate_total(self, session: OrderSession, arguments: Dict, turn: TurnResult) -> Dict:
        args = CalculateTotalArgs.model_validate(arguments)
        quantity = coerce_quantity(args.quantity)
        total = calculate_line_total(args.item, args.size, quantity, self.catalog)
        turn.total = total
        if session.current_order is not None and session.current_payment is None:
            session.pending_total = total
        return {
            "success": True,
            "totalAmount": total,
            "message": f"訂單總金額：{total} 元",
        }

    def _process_order(self, session: OrderSession, arguments: Dict, turn: TurnResult) -> Dict:
        args = ProcessOrderArgs.model_validate(arguments)
        order = self.order_service.build_order(
            args.item, args.size, args.quantity, args.ice, args.sugar, args.add_on
        )
        session.current_order = order
        session.current_payment = None
        session.pending_total = calculate_total(order, self.catalog)
        turn.order = order
        return {
            "success": True,
            "order": order.to_dict(),
            "message": "訂單已成功建立",
        }

    def _process_payment(self, session: OrderSession, arguments: Dict, turn: TurnResult) -> Dict:
        args = ProcessPaymentArgs.model_validate(arguments)
        if session.current_order is None:
            raise MissingOrderError()
        if args.order_id and args.order_id != session.current_order.order_id:
            logger.warning(
                f"模型传入的订单 ID {args.order_id!r} 与当前订单 "
                f"{session.current_order.order_id!r} 不一致，使用当前订单"
            )

        result = self.payment_processor.process_payment(
            session.current_order, args.payment_method, args.amount
        )
        session.current_payment = result.payment_record
        turn.payment = result.payment_record
        return result.to_dict()

    def _transfer_to_production(self, session: OrderSession, arguments: Dict, turn: TurnResult) -> Dict:
        TransferArgs.model_validate(arguments)
        result = self.scheduler.transfer_to_production(
            session.current_order, session.current_payment
        )
        turn.production_order = result.production_order
        turn.completed = True
        session.reset_lifecycle()
        return result.to_dict()


class OrderingAssistant:
    """点单对话助手"""

    def __init__(
        self,
        client: "ChatClient",
        catalog: MenuCatalog,
        order_service: OrderService,
        payment_processor: PaymentProcessor,
        scheduler: ProductionScheduler,
        text_model: Optional[str] = None
    ):
        self.client = client
        self.catalog = catalog
        self.order_service = order_service
        self.payment_processor = payment_processor
        self.scheduler = scheduler
        self.text_model = text_model
        self.dispatcher = ToolDispatcher(catalog, order_service, payment_processor, scheduler)

    def new_session(self, mode: ChatMode = ChatMode.TOOLS) -> OrderSession:
        """创建新会话并写入系统提示词"""
        mode = ChatMode(mode)
        session = OrderSession(mode=mode)
        session.add_message("system", build_system_prompt(self.catalog.to_prompt_json(), mode))
        logger.debug(f"创建会话: {session.session_id} ({mode.value})")
        return session

    def handle(self, session: OrderSession, user_message: str) -> TurnResult:
        """按会话模式处理一轮用户输入"""
        if session.mode == ChatMode.TEXT:
            return self.process_text_message(session, user_message)
        return self.process_message(session, user_message)

    # ==================== 工具调用模式 ====================

    def process_message(self, session: OrderSession, user_message: str) -> TurnResult:
        """工具调用模式

        Raises:
            IntentServiceError: 模型服务错误
        """
        turn = TurnResult()
        session.add_message("user", sanitize_text(user_message))

        reply = self.client.chat(session.messages, tools=TOOL_SCHEMAS)
        session.messages.append(reply.to_message())
        if reply.content:
            turn.replies.append(reply.content)

        if not reply.tool_calls:
            return turn

        logger.info(f"处理工具调用: {[call.name for call in reply.tool_calls]}")
        for call in reply.tool_calls:
            session.messages.append(self.dispatcher.dispatch(session, call, turn))

        follow_up = self.client.chat(session.messages)
        session.messages.append(follow_up.to_message())
        if follow_up.content:
            turn.replies.append(follow_up.content)

        turn.awaiting_payment = session.awaiting_payment
        return turn

    # ==================== 文本模式 ====================

    def process_text_message(self, session: OrderSession, user_message: str) -> TurnResult:
        """文本模式：从回复中的 JSON 取订单

        完整订单建立后进入待支付状态，由 settle_payment 完成后续流程。

        Raises:
            IntentServiceError: 模型服务错误
        """
        turn = TurnResult()
        session.add_message("user", sanitize_text(user_message))

        reply = self.client.chat(session.messages, model=self.text_model)
        session.messages.append(reply.to_message())
        if reply.content:
            turn.replies.append(reply.content)

        intent = parse_order_response(reply.content)
        self._apply_intent(session, intent, turn)
        return turn

    def _apply_intent(self, session: OrderSession, intent: Optional[OrderIntent], turn: TurnResult):
        if isinstance(intent, IncompleteOrderIntent):
            turn.incomplete = intent
            return

        if not isinstance(intent, CompleteOrderIntent):
            return

        fields = intent.order
        try:
            order = self.order_service.build_order(
                fields.item, fields.size, fields.quantity, fields.ice, fields.sugar, fields.add_on
            )
        except OrderSystemError as e:
            logger.info(f"建立订单失败: {e.message}")
            turn.errors.append(e.message)
            return

        session.current_order = order
        session.current_payment = None
        session.pending_total = calculate_total(order, self.catalog)
        turn.order = order
        turn.total = session.pending_total
        turn.awaiting_payment = True

    def settle_payment(self, session: OrderSession, method: str) -> TurnResult:
        """支付当前订单并转给制作部门

        金额使用计价结果。支付或转单失败时抛出异常，已写入的订单不回滚；
        支付已成功时会话保留支付记录，可再次尝试转单。

        Raises:
            PaymentError: 支付失败
            TransferError: 转单失败
            PersistenceError: 写入失败
        """
        turn = TurnResult()
        order = session.current_order
        if order is None:
            raise MissingOrderError()

        if session.current_payment is None:
            amount = session.pending_total
            if amount is None:
                amount = calculate_total(order, self.catalog)
            result = self.payment_processor.process_payment(order, method, amount)
            session.current_payment = result.payment_record

        turn.payment = session.current_payment
        turn.total = session.current_payment.amount

        production = self.scheduler.transfer_to_production(order, session.current_payment)
        turn.production_order = production.production_order
        turn.completed = True
        session.reset_lifecycle()
        return turn

    def abandon_order(self, session: OrderSession):
        """放弃当前订单（已写入的订单记录保留）"""
        if session.current_order is not None:
            logger.info(f"会话 {session.session_id} 放弃订单 {session.current_order.order_id}")
        session.reset_lifecycle(completed=False)
