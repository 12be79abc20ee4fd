"""
配置管理系统

使用 Pydantic Settings 管理应用配置，支持环境变量和 .env 文件。
"""

import logging
from typing import Optional
from pathlib import Path
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# 默认数据目录 (项目根目录的 data 文件夹)
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class LLMSettings(BaseSettings):
    """语言模型相关配置

    默认指向本地 Ollama 的 OpenAI 兼容接口。
    """
    model_config = SettingsConfigDict(env_prefix="LLM_")

    base_url: str = Field(default="http://localhost:11434/v1", description="模型服务地址")
    api_key: str = Field(default="ollama", description="API Key（本地服务可随意填写）")
    model: str = Field(default="llama3.2", description="工具调用模式使用的模型")
    chat_model: str = Field(default="gemma3", description="文本模式使用的模型")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="生成温度")
    timeout: float = Field(default=120.0, ge=5.0, le=600.0, description="请求超时时间")


class StorageSettings(BaseSettings):
    """记录存储相关配置"""
    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="数据目录")
    menu_file: str = Field(default="menu.json", description="菜单文件名")
    orders_file: str = Field(default="orders.json", description="订单文件名")
    payments_file: str = Field(default="payments.json", description="支付记录文件名")
    production_file: str = Field(default="production.json", description="制作订单文件名")

    @property
    def menu_path(self) -> Path:
        return self.data_dir / self.menu_file

    @property
    def orders_path(self) -> Path:
        return self.data_dir / self.orders_file

    @property
    def payments_path(self) -> Path:
        return self.data_dir / self.payments_file

    @property
    def production_path(self) -> Path:
        return self.data_dir / self.production_file


class PaymentSettings(BaseSettings):
    """支付相关配置"""
    model_config = SettingsConfigDict(env_prefix="PAYMENT_")

    strict_amount: bool = Field(
        default=False,
        description="是否校验支付金额与订单总额一致"
    )


class LoggingSettings(BaseSettings):
    """日志相关配置"""
    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="WARNING", description="日志级别")
    format: str = Field(default="plain", description="日志格式 (structured/plain)")
    file: Optional[Path] = Field(default=None, description="日志文件路径")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}, 有效值: {valid_levels}")
        return v

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ('structured', 'plain'):
            raise ValueError(f"无效的日志格式: {v}, 有效值: ['structured', 'plain']")
        return v


class Settings(BaseSettings):
    """应用主配置"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # 应用信息
    app_name: str = Field(default="飲料點餐 AI 助理", description="应用名称")
    app_version: str = Field(default="0.2.0", description="应用版本")
    environment: str = Field(default="development", description="运行环境")

    # 子配置
    llm: LLMSettings = Field(default_factory=LLMSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = ['development', 'testing', 'production']
        v = v.lower()
        if v not in valid_envs:
            raise ValueError(f"无效的环境: {v}, 有效值: {valid_envs}")
        return v

    def to_dict(self) -> dict:
        """转换为字典（隐藏敏感信息）"""
        return {
            "app_name": self.app_name,
            "app_version": self.app_version,
            "environment": self.environment,
            "llm": {
                "base_url": self.llm.base_url,
                "model": self.llm.model,
                "chat_model": self.llm.chat_model,
                "has_api_key": bool(self.llm.api_key),
                "temperature": self.llm.temperature,
            },
            "storage": {
                "data_dir": str(self.storage.data_dir),
                "menu": str(self.storage.menu_path),
            },
            "payment": {
                "strict_amount": self.payment.strict_amount
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format
            }
        }


# ==================== 全局实例 ====================

@lru_cache()
def get_settings() -> Settings:
    """获取配置实例（缓存）"""
    settings = Settings()
    logger.info(f"配置已加载: {settings.environment} 环境")
    return settings


def reload_settings() -> Settings:
    """重新加载配置"""
    get_settings.cache_clear()
    return get_settings()
