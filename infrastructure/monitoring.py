"""
结构化日志模块

提供结构化日志格式化、敏感信息过滤和订单生命周期事件记录。
"""

import re
import sys
import json
import logging
from typing import Any, Optional
from datetime import datetime, timezone
from pathlib import Path


# ==================== 结构化日志 ====================

class StructuredFormatter(logging.Formatter):
    """结构化日志格式化器

    输出 JSON 格式的日志，便于日志聚合和分析。
    """

    def __init__(self, service_name: str = "drink-order-assistant"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        # 添加位置信息
        if record.pathname:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName
            }

        # 添加额外字段
        if hasattr(record, 'extra_data'):
            log_data["data"] = record.extra_data

        # 添加异常信息
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info)
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class SensitiveDataFilter(logging.Filter):
    """敏感数据过滤器

    自动屏蔽日志中的 API Key 等敏感信息。
    """

    SENSITIVE_PATTERNS = ['api_key', 'apikey', 'api-key', 'token', 'secret', 'sk-']

    MASKS = [
        (r'(api[_-]?key\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(token\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(secret\s*[=:]\s*)["\']?([^"\'\s,}]+)["\']?', r'\1****'),
        (r'(sk-[a-zA-Z0-9]+)', '****'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage().lower()
        for pattern in self.SENSITIVE_PATTERNS:
            if pattern in msg:
                record.msg = self.mask(record.getMessage())
                record.args = None
                break
        return True

    @classmethod
    def mask(cls, text: str) -> str:
        """屏蔽敏感值"""
        result = text
        for pattern, replacement in cls.MASKS:
            result = re.sub(pattern, replacement, result, flags=re.IGNORECASE)
        return result


class StructuredLogger:
    """结构化日志记录器

    提供便捷的结构化日志方法，字段通过 extra_data 传给格式化器。
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, message: str, **kwargs):
        self.logger.log(level, message, extra={'extra_data': kwargs})

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def log_error(self, error: Exception, context: Optional[dict] = None):
        """记录错误"""
        self.error(
            "error_occurred",
            error_type=type(error).__name__,
            error_message=str(error),
            context=context or {}
        )

    def log_event(self, event: str, **fields: Any):
        """记录订单生命周期事件"""
        self.info(event, **fields)


def get_structured_logger(name: str = "drink_order") -> StructuredLogger:
    """获取结构化日志记录器"""
    return StructuredLogger(name)


def setup_logging(
    level: int = logging.INFO,
    structured: bool = True,
    service_name: str = "drink-order-assistant",
    log_file: Optional[Path] = None
):
    """配置日志系统

    Args:
        level: 日志级别
        structured: 是否使用结构化日志格式
        service_name: 服务名称
        log_file: 额外写入的日志文件
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 清除现有处理器
    root_logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        if structured:
            handler.setFormatter(StructuredFormatter(service_name))
        else:
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
        handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(handler)

    logging.debug(f"日志系统已配置: level={logging.getLevelName(level)}, structured={structured}")
