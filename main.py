#!/usr/bin/env python3
"""
飲料點餐 AI 助理 - 命令行入口

子命令:
- chat:       与点单助理对话（工具调用模式 / 文本模式）
- production: 制作部门管理（查看、更新状态、统计）
- menu:       查看菜单
"""

import sys
import logging
import argparse
from typing import Callable, List, Optional

from pydantic import ValidationError

from config import Settings, get_settings
from core.types import ChatMode, ProductionStatus, PAYMENT_METHODS
from core.validators import is_exit_command
from formatters import (
    format_incomplete_order_message,
    format_menu,
    format_order_display,
    format_payment_choices,
    format_payment_display,
    format_production_order_display,
    format_production_summary,
    format_statistics,
)
from infrastructure.exceptions import OrderSystemError
from infrastructure.monitoring import get_structured_logger, setup_logging
from models.session import OrderSession
from services.bootstrap import ServiceBundle, create_assistant, create_services
from services.ordering_assistant import OrderingAssistant, TurnResult, payment_method_by_choice

logger = logging.getLogger(__name__)
events = get_structured_logger("drink_order.session")

InputFn = Callable[[str], str]


# ==================== 对话 ====================

def show_turn(turn: TurnResult):
    """显示一轮对话的结果"""
    for reply in turn.replies:
        print(f"\n🤖 AI: {reply}\n")
    if turn.order is not None:
        print(format_order_display(turn.order))
    if turn.total is not None and turn.payment is None:
        print(f"💰 訂單總金額：{turn.total} 元\n")
    if turn.payment is not None:
        print(format_payment_display(turn.payment))
    if turn.production_order is not None:
        print(format_production_order_display(turn.production_order))
    if turn.incomplete is not None:
        print(format_incomplete_order_message(turn.incomplete))
    for error in turn.errors:
        print(f"❌ {error}")
    if turn.completed:
        print("\n🎉 訂單處理完成！感謝您的購買！\n")


def collect_payment(assistant: OrderingAssistant, session: OrderSession, read: InputFn):
    """文本模式下询问支付方式并完成支付、转单"""
    print(format_payment_choices(PAYMENT_METHODS))
    choice = read(f"\n請輸入支付方式編號 (1-{len(PAYMENT_METHODS)})：")
    method = payment_method_by_choice(choice)
    if method is None:
        print("❌ 無效的支付方式選擇，訂單未付款")
        assistant.abandon_order(session)
        return

    print(f"\n✅ 已選擇：{method}")
    try:
        show_turn(assistant.settle_payment(session, method))
    except OrderSystemError as e:
        events.log_error(e, {"session_id": session.session_id, "stage": "settle_payment"})
        print(f"❌ 後續處理失敗：{e.message}")
        assistant.abandon_order(session)


def run_chat(assistant: OrderingAssistant, mode: ChatMode, read: InputFn = input) -> int:
    """对话循环，输入 exit / quit 结束"""
    session = assistant.new_session(mode)

    print("🍹 歡迎使用飲料點餐 AI 助理！")
    if mode == ChatMode.TOOLS:
        print("✨ Tools 整合模式")
    print('輸入 "exit" 或 "quit" 結束對話\n')

    while True:
        try:
            text = read("👤 您：")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if is_exit_command(text):
            break
        if not text.strip():
            continue

        try:
            turn = assistant.handle(session, text)
        except OrderSystemError as e:
            events.log_error(e, {"session_id": session.session_id, "mode": mode.value})
            print(f"❌ 發生錯誤：{e.message}")
            continue

        show_turn(turn)
        if mode == ChatMode.TEXT and turn.awaiting_payment:
            collect_payment(assistant, session, read)

    print("\n👋 感謝使用，再見！")
    return 0


# ==================== 制作部门 ====================

def run_production(bundle: ServiceBundle, args: argparse.Namespace) -> int:
    scheduler = bundle.scheduler

    if args.action == "list":
        orders = scheduler.pending_orders() if args.pending else scheduler.list_orders()
        print(format_production_summary(orders))

    elif args.action == "show":
        order = scheduler.get_order(args.order_id)
        if order is None:
            print("❌ 找不到指定的訂單")
            return 1
        print(format_production_order_display(order))

    elif args.action == "update":
        try:
            message = scheduler.update_status(args.order_id, args.status)
        except OrderSystemError as e:
            print(f"❌ 更新狀態失敗：{e.message}")
            return 1
        print(f"✅ {message}")

    elif args.action == "stats":
        print(format_statistics(scheduler.statistics()))

    return 0


# ==================== 入口 ====================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="飲料點餐 AI 助理",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--log-level", help="覆盖日志级别 (DEBUG/INFO/WARNING/ERROR)")
    subparsers = parser.add_subparsers(dest="command", help="子命令")

    chat_parser = subparsers.add_parser("chat", help="与点单助理对话")
    chat_parser.add_argument(
        "--mode",
        choices=[m.value for m in ChatMode],
        default=ChatMode.TOOLS.value,
        help="tools: 工具调用; text: 回复内嵌 JSON"
    )

    prod_parser = subparsers.add_parser("production", help="制作部门管理")
    prod_sub = prod_parser.add_subparsers(dest="action", required=True)

    list_parser = prod_sub.add_parser("list", help="查看所有制作订单")
    list_parser.add_argument("--pending", action="store_true", help="只显示待处理订单")

    show_parser = prod_sub.add_parser("show", help="查看订单详细信息")
    show_parser.add_argument("order_id", help="订单编号（时间戳）")

    update_parser = prod_sub.add_parser("update", help="更新订单状态")
    update_parser.add_argument("order_id", help="订单编号（时间戳）")
    update_parser.add_argument("status", help=f"新状态: {', '.join(ProductionStatus.values())}")

    prod_sub.add_parser("stats", help="统计信息")

    subparsers.add_parser("menu", help="查看菜单")

    return parser


def configure_logging(settings: Settings, override: Optional[str] = None):
    level_name = (override or settings.logging.level).upper()
    setup_logging(
        level=getattr(logging, level_name, logging.WARNING),
        structured=settings.logging.format == "structured",
        log_file=settings.logging.file
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
        configure_logging(settings, args.log_level)
        bundle = create_services(settings)
    except (OrderSystemError, ValidationError) as e:
        print(f"❌ 程式發生錯誤：{e}", file=sys.stderr)
        return 1

    if args.command == "menu":
        print(format_menu(bundle.catalog))
        return 0

    if args.command == "production":
        return run_production(bundle, args)

    return run_chat(create_assistant(bundle), ChatMode(args.mode))


if __name__ == "__main__":
    sys.exit(main())
