"""语言模型客户端

通过 OpenAI SDK 调用本地模型服务（Ollama 的 OpenAI 兼容接口）。
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config import LLMSettings
from infrastructure.exceptions import classify_openai_error, ModelResponseError

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """一次工具调用"""
    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(self.arguments, ensure_ascii=False),
            },
        }


@dataclass
class ModelReply:
    """模型回复"""
    content: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)

    def to_message(self) -> Dict[str, Any]:
        """转换为对话历史中的 assistant 消息"""
        message: Dict[str, Any] = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_message() for call in self.tool_calls]
        return message


def decode_arguments(raw: Any) -> Dict[str, Any]:
    """解析工具参数

    OpenAI 接口返回 JSON 字符串，部分本地模型直接返回对象。
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ModelResponseError(f"工具參數不是有效的 JSON：{raw}") from e
    if not isinstance(data, dict):
        raise ModelResponseError(f"工具參數必須是物件：{raw}")
    return data


class ChatClient:
    """对话补全客户端"""

    def __init__(self, settings: LLMSettings, client: Optional[OpenAI] = None):
        self.settings = settings
        self.model = settings.model
        self.client = client or OpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout
        )
        logger.info(f"模型客户端初始化完成: {settings.base_url} ({self.model})")

    def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        model: Optional[str] = None
    ) -> ModelReply:
        """发送一次对话请求

        Raises:
            IntentServiceError: 模型服务不可用或返回异常
        """
        model_name = model or self.model
        kwargs: Dict[str, Any] = {
            "model": model_name,
            "messages": messages,
            "temperature": self.settings.temperature,
        }
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"

        try:
            response = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise classify_openai_error(e, model_name) from e

        if not response.choices:
            raise ModelResponseError("模型沒有回傳任何內容")

        message = response.choices[0].message
        tool_calls = []
        for index, call in enumerate(message.tool_calls or []):
            tool_calls.append(ToolCall(
                id=call.id or f"call_{index}",
                name=call.function.name,
                arguments=decode_arguments(call.function.arguments),
            ))

        logger.debug(f"模型回复: content={len(message.content or '')} 字, tool_calls={len(tool_calls)}")
        return ModelReply(content=message.content or "", tool_calls=tool_calls)
