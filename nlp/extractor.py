"""订单意图抽取

从模型的自由文本回复中取出 JSON 订单数据。
"""

import re
import json
import logging
from typing import Any, Dict, Optional

from models.intent import (
    OrderFields, CompleteOrderIntent, IncompleteOrderIntent, OrderIntent
)

logger = logging.getLogger(__name__)

# 贪婪匹配第一个 "{" 到最后一个 "}"
JSON_BLOCK_PATTERN = re.compile(r'\{[\s\S]*\}')


def extract_json_block(content: str) -> Optional[Dict[str, Any]]:
    """取出回复中的 JSON 对象，失败返回 None"""
    if not content:
        return None

    match = JSON_BLOCK_PATTERN.search(content)
    if not match:
        return None

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.debug(f"回复中的 JSON 解析失败: {e}")
        return None

    return data if isinstance(data, dict) else None


def parse_order_response(content: str) -> Optional[OrderIntent]:
    """解析模型回复中的订单信息

    Returns:
        CompleteOrderIntent / IncompleteOrderIntent，本轮没有订单数据时返回 None
    """
    data = extract_json_block(content)
    if data is None:
        return None

    order = data.get("order")
    order_fields = OrderFields.from_dict(order) if isinstance(order, dict) else None
    intent_type = data.get("type")

    if intent_type == "complete":
        if order_fields is None:
            return None
        return CompleteOrderIntent(order=order_fields)

    if intent_type == "incomplete":
        missing = data.get("missing") or []
        if not isinstance(missing, list):
            missing = [str(missing)]
        message = data.get("message")
        if order_fields is None and not missing and not message:
            return None
        return IncompleteOrderIntent(
            missing=[str(m) for m in missing],
            message=message,
            order=order_fields,
        )

    return None
