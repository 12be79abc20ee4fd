"""Prompt 模板和 Tool Schema 定义"""

from core.types import SIZES, ICE_LEVELS, SUGAR_LEVELS, ADD_ONS, PAYMENT_METHODS, ChatMode

_OPTIONS = f"""## 點餐選項
- 大小：{'/'.join(SIZES)}
- 冰塊：{'/'.join(ICE_LEVELS)}
- 甜度：{'/'.join(SUGAR_LEVELS)}
- 添加：{'/'.join(ADD_ONS)}（可不加）
- 支付方式：{'/'.join(PAYMENT_METHODS)}"""


PROMPT_TEMPLATES = {
    ChatMode.TEXT: """你是一家手搖飲料店的點餐助理，用親切的繁體中文和顧客對話。
只能推薦菜單中的品項，品項名稱必須與菜單的 name_zh 完全一致。

{options}

## 回覆格式
當顧客的訂單資訊齊全（品項、大小、數量、冰塊、甜度）時，在回覆最後附上 JSON：
{{"type": "complete", "order": {{"item": "品項", "size": "M", "quantity": 1, "ice": "微冰", "sugar": "微糖", "addOn": null}}}}

當訂單資訊不完整時，附上：
{{"type": "incomplete", "order": {{已知的欄位}}, "missing": ["缺少的欄位"], "message": "追問顧客的話"}}

沒有點餐時不要輸出 JSON。

菜單資料：{menu_json}""",

    ChatMode.TOOLS: """你是一家手搖飲料店的點餐助理，用親切的繁體中文和顧客對話。
只能推薦菜單中的品項，品項名稱必須與菜單的 name_zh 完全一致。

{options}

## 流程
1. 收集完整的訂單資訊後呼叫 process_order 建立訂單。
2. 需要報價時呼叫 calculate_total。
3. 顧客選擇支付方式後呼叫 process_payment，金額使用 calculate_total 的結果。
4. 支付成功後呼叫 transfer_to_production 轉單給製作部門。
資訊不完整時先詢問顧客，不要猜測。

菜單資料：{menu_json}""",
}


def build_system_prompt(menu_json: str, mode: ChatMode = ChatMode.TOOLS) -> str:
    """组装系统提示词"""
    return PROMPT_TEMPLATES[ChatMode(mode)].format(options=_OPTIONS, menu_json=menu_json)


_ITEM_PROPERTIES = {
    "item": {
        "type": "string",
        "description": "飲料品項名稱",
    },
    "size": {
        "type": "string",
        "enum": SIZES,
        "description": "飲料大小",
    },
    "quantity": {
        "type": "integer",
        "minimum": 1,
        "description": "數量",
    },
}


TOOL_SCHEMAS = [
    {
        "type": "function",
        "function": {
            "name": "calculate_total",
            "description": "計算訂單總金額",
            "parameters": {
                "type": "object",
                "properties": dict(_ITEM_PROPERTIES),
                "required": ["item", "size", "quantity"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "process_order",
            "description": "處理完整的訂單資訊，建立訂單記錄",
            "parameters": {
                "type": "object",
                "properties": {
                    **_ITEM_PROPERTIES,
                    "ice": {
                        "type": "string",
                        "enum": ICE_LEVELS,
                        "description": "冰塊選擇",
                    },
                    "sugar": {
                        "type": "string",
                        "enum": SUGAR_LEVELS,
                        "description": "甜度選擇",
                    },
                    "addOn": {
                        "type": "string",
                        "enum": ADD_ONS,
                        "description": "添加品（可選）",
                        "nullable": True,
                    },
                },
                "required": ["item", "size", "quantity", "ice", "sugar"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "process_payment",
            "description": "處理訂單支付",
            "parameters": {
                "type": "object",
                "properties": {
                    "orderId": {
                        "type": "string",
                        "description": "訂單ID（時間戳）",
                    },
                    "paymentMethod": {
                        "type": "string",
                        "enum": PAYMENT_METHODS,
                        "description": "支付方式",
                    },
                    "amount": {
                        "type": "number",
                        "description": "支付金額",
                    },
                },
                "required": ["orderId", "paymentMethod", "amount"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "transfer_to_production",
            "description": "將已支付的訂單轉給製作部門",
            "parameters": {
                "type": "object",
                "properties": {
                    "orderId": {
                        "type": "string",
                        "description": "訂單ID",
                    },
                    "paymentRecordId": {
                        "type": "string",
                        "description": "支付記錄ID",
                    },
                },
                "required": ["orderId", "paymentRecordId"],
            },
        },
    },
]

TOOL_NAMES = [tool["function"]["name"] for tool in TOOL_SCHEMAS]
