"""NLP 处理模块"""

from .prompts import PROMPT_TEMPLATES, TOOL_SCHEMAS, TOOL_NAMES, build_system_prompt
from .extractor import parse_order_response, extract_json_block

__all__ = [
    "PROMPT_TEMPLATES",
    "TOOL_SCHEMAS",
    "TOOL_NAMES",
    "build_system_prompt",
    "parse_order_response",
    "extract_json_block",
]
