"""
JSON 文件记录存储

每个集合是一个 JSON 数组文件，每次写入都整体覆盖。只适用于单进程、单会话场景，
并发写入会互相覆盖。
"""

import json
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from pathlib import Path

from models.order import Order
from models.payment import PaymentRecord
from models.production import ProductionOrder
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonRecordStore:
    """JSON 数组文件存储

    读取失败（文件不存在、格式错误、内容不是数组）一律视为空集合；
    写入失败抛出 PersistenceError。
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_all(self) -> List[Dict[str, Any]]:
        """读取全部记录"""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            logger.warning(f"{self.path} 不是有效的 UTF-8，视为空集合: {e}")
            return []
        except OSError as e:
            logger.warning(f"读取 {self.path} 失败，视为空集合: {e}")
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"{self.path} 格式错误，视为空集合: {e}")
            return []

        if not isinstance(records, list):
            logger.warning(f"{self.path} 内容不是数组，视为空集合")
            return []
        return records

    def write_all(self, records: List[Dict[str, Any]]):
        """整体覆盖写入"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(records, ensure_ascii=False, indent=2),
                encoding="utf-8"
            )
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"寫入失敗：{e}", path=str(self.path)) from e

    def append(self, record: Dict[str, Any]):
        """读取、追加、覆盖写入"""
        records = self.read_all()
        records.append(record)
        self.write_all(records)
        logger.debug(f"{self.path.name} 追加记录，共 {len(records)} 条")


class Repository(Generic[T]):
    """基于 JsonRecordStore 的类型化仓储"""

    def __init__(
        self,
        store: JsonRecordStore,
        to_dict: Callable[[T], Dict[str, Any]],
        from_dict: Callable[[Dict[str, Any]], T],
        key: str
    ):
        self.store = store
        self._to_dict = to_dict
        self._from_dict = from_dict
        self._key = key

    def add(self, record: T):
        self.store.append(self._to_dict(record))

    def _decode(self, row: Any) -> Optional[T]:
        """解码单条记录，字段缺失或类型不符时返回 None"""
        try:
            return self._from_dict(row)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning(f"{self.store.path.name} 中有无法解析的记录，已跳过: {e!r}")
            return None

    def list_all(self) -> List[T]:
        records = []
        for row in self.store.read_all():
            record = self._decode(row)
            if record is not None:
                records.append(record)
        return records

    def find(self, key_value: str) -> Optional[T]:
        """按键线性查找第一条匹配记录"""
        for row in self.store.read_all():
            if isinstance(row, dict) and row.get(self._key) == key_value:
                return self._decode(row)
        return None

    def update_fields(self, key_value: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """就地修改第一条匹配记录的指定字段并整体写回

        其他记录原样保留（包括模型未定义的字段）。找不到时不写入，返回 None；
        找到时返回修改前的原始记录。
        """
        rows = self.store.read_all()
        for row in rows:
            if isinstance(row, dict) and row.get(self._key) == key_value:
                previous = dict(row)
                row.update(changes)
                self.store.write_all(rows)
                return previous
        return None


class OrderRepository(Repository):
    """订单仓储"""

    def __init__(self, store: JsonRecordStore):
        super().__init__(store, Order.to_dict, Order.from_dict, key="timestamp")


class PaymentRepository(Repository):
    """支付记录仓储"""

    def __init__(self, store: JsonRecordStore):
        super().__init__(store, PaymentRecord.to_dict, PaymentRecord.from_dict, key="orderId")


class ProductionRepository(Repository):
    """制作订单仓储"""

    def __init__(self, store: JsonRecordStore):
        super().__init__(store, ProductionOrder.to_dict, ProductionOrder.from_dict, key="orderId")
