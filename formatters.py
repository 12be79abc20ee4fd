"""终端显示格式化"""

from datetime import datetime
from typing import Iterable, List

from core.types import ProductionStatus, PaymentStatus
from models.intent import IncompleteOrderIntent
from models.menu import MenuCatalog
from models.order import Order
from models.payment import PaymentRecord
from models.production import ProductionOrder, ProductionStats

STATUS_EMOJI = {
    ProductionStatus.PENDING.value: "⏳",
    ProductionStatus.IN_PROGRESS.value: "🔥",
    ProductionStatus.COMPLETED.value: "✅",
    ProductionStatus.CANCELLED.value: "❌",
}

CATEGORY_TITLES = {
    "tea": "🍵 純茶",
    "milk_tea": "🧋 奶茶",
    "tea_latte": "🥛 鮮奶茶",
    "fresh_juice": "🍊 鮮果汁",
    "season_special": "🌸 季節限定",
}


def format_time(timestamp: str) -> str:
    """ISO 时间戳转本地时间字符串"""
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(timestamp)
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_order_display(order: Order) -> str:
    lines = [
        "📝 訂單已記錄！",
        f"  品項：{order.item}",
        f"  大小：{order.size}",
        f"  數量：{order.quantity}",
        f"  冰塊：{order.ice}",
        f"  甜度：{order.sugar}",
        f"  添加：{order.add_on or '無'}",
        f"  時間：{format_time(order.timestamp)}",
        "",
    ]
    return "\n".join(lines)


def format_incomplete_order_message(intent: IncompleteOrderIntent) -> str:
    if intent.message:
        return f"❓ {intent.message}\n"

    lines = ["❓ 訂單資訊不完整，請提供以下資訊："]
    lines.extend(f"  - {info}" for info in intent.missing)
    lines.append("")
    return "\n".join(lines)


def format_payment_display(record: PaymentRecord) -> str:
    status = "✅ 成功" if record.status == PaymentStatus.COMPLETED.value else "❌ 失敗"
    lines = [
        "💳 支付資訊",
        f"  訂單編號：{record.order_id}",
        f"  支付方式：{record.payment_method}",
        f"  支付金額：{record.amount} 元",
        f"  支付狀態：{status}",
        f"  支付時間：{format_time(record.timestamp)}",
        "",
    ]
    return "\n".join(lines)


def format_production_order_display(order: ProductionOrder) -> str:
    details = order.order_details
    payment = order.payment_info
    lines = [
        "🏭 製作訂單",
        f"  訂單編號：{order.order_id}",
        f"  製作狀態：{STATUS_EMOJI.get(order.status, '')} {order.status}",
        f"  預估時間：{order.estimated_time} 分鐘",
        f"  品項：{details.item}",
        f"  規格：{details.size} | {details.quantity} 杯",
        f"  調整：{details.ice} | {details.sugar}",
        f"  添加：{details.add_on or '無'}",
        f"  支付：{payment.method} | {payment.amount} 元",
        f"  備註：{order.notes or '無'}",
        f"  建立時間：{format_time(order.timestamp)}",
    ]
    if order.last_updated:
        lines.append(f"  最後更新：{format_time(order.last_updated)}")
    lines.append("")
    return "\n".join(lines)


def format_production_summary(orders: Iterable[ProductionOrder]) -> str:
    """制作订单总览"""
    orders = list(orders)
    if not orders:
        return "📭 目前沒有製作訂單"

    lines = [f"🏭 製作訂單總覽 (共 {len(orders)} 筆)", "=" * 50]
    for index, order in enumerate(orders, start=1):
        lines.extend([
            "",
            f"{index}. 訂單編號：{order.order_id}",
            f"   狀態：{STATUS_EMOJI.get(order.status, '')} {order.status}",
            f"   品項：{order.order_details.item} x{order.order_details.quantity}",
            f"   預估時間：{order.estimated_time} 分鐘",
            f"   建立時間：{format_time(order.timestamp)}",
        ])
    return "\n".join(lines)


def format_statistics(stats: ProductionStats) -> str:
    if stats.total == 0:
        return "📊 目前沒有製作訂單"

    lines = [
        "📊 製作部門統計",
        "=" * 30,
        f"總訂單數：{stats.total}",
        f"待處理：{stats.pending}",
        f"製作中：{stats.in_progress}",
        f"已完成：{stats.completed}",
        f"已取消：{stats.cancelled}",
        f"完成率：{stats.completion_rate:.1f}%",
    ]
    return "\n".join(lines)


def format_menu(catalog: MenuCatalog) -> str:
    lines: List[str] = []
    current = None
    for entry in catalog:
        if entry.category != current:
            current = entry.category
            if lines:
                lines.append("")
            lines.append(CATEGORY_TITLES.get(current.value, current.value))
        marks = ("👍" if entry.recommended else "") + ("✨" if entry.special else "")
        prices = " / ".join(f"{size} {price}" for size, price in entry.prices.items())
        lines.append(f"  {entry.name} {marks}".rstrip() + f"  ({prices})")
    return "\n".join(lines)


def format_payment_choices(methods: List[str]) -> str:
    lines = ["💳 請選擇支付方式："]
    lines.extend(f"  {index}. {method}" for index, method in enumerate(methods, start=1))
    return "\n".join(lines)
