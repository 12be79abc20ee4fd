"""菜单数据模型

菜单文件结构::

    {"menu": {"tea": [{"name_zh": "...", "prices": {"M": 30, "L": 35},
                       "recommended": true, "special": false}, ...], ...}}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.types import MenuCategory, CATEGORY_ORDER
from infrastructure.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuEntry:
    """菜单品项"""
    category: MenuCategory
    name: str
    prices: Dict[str, float] = field(default_factory=dict)
    name_en: Optional[str] = None
    recommended: bool = False
    special: bool = False

    def price_for(self, size: str) -> Optional[float]:
        return self.prices.get(size)


@dataclass(frozen=True)
class ItemPriceInfo:
    """品项价格信息"""
    category: str
    prices: Dict[str, float]
    recommended: bool = False
    special: bool = False


class MenuCatalog:
    """只读菜单目录

    按固定分类顺序保存品项，查找时返回第一个同名品项。
    """

    def __init__(self, entries: List[MenuEntry], raw: Optional[Dict[str, Any]] = None):
        self._entries = sorted(entries, key=lambda e: CATEGORY_ORDER.index(e.category))
        self._raw = raw if raw is not None else self._to_raw(self._entries)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuCatalog":
        menu = data.get("menu")
        if not isinstance(menu, dict):
            raise CatalogLoadError("菜單資料缺少 menu 欄位")

        entries = []
        for category in CATEGORY_ORDER:
            for drink in menu.get(category.value, []):
                name = drink.get("name_zh") or drink.get("name")
                if not name:
                    logger.warning(f"分类 {category.value} 中有缺少名称的品项，已跳过")
                    continue
                entries.append(MenuEntry(
                    category=category,
                    name=name,
                    prices=dict(drink.get("prices", {})),
                    name_en=drink.get("name_en"),
                    recommended=bool(drink.get("recommended", False)),
                    special=bool(drink.get("special", False)),
                ))
        return cls(entries, raw=data)

    @classmethod
    def load(cls, path: Path) -> "MenuCatalog":
        """从 JSON 文件加载菜单"""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"讀取菜單失敗：{e}", path=str(path)) from e

        catalog = cls.from_dict(data)
        logger.info(f"菜单已加载: {path} ({len(catalog)} 个品项)")
        return catalog

    @staticmethod
    def _to_raw(entries: List[MenuEntry]) -> Dict[str, Any]:
        menu: Dict[str, List[Dict[str, Any]]] = {c.value: [] for c in CATEGORY_ORDER}
        for entry in entries:
            drink = {"name_zh": entry.name, "prices": dict(entry.prices)}
            if entry.name_en:
                drink["name_en"] = entry.name_en
            if entry.recommended:
                drink["recommended"] = True
            if entry.special:
                drink["special"] = True
            menu[entry.category.value].append(drink)
        return {"menu": menu}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def find(self, name: str) -> Optional[MenuEntry]:
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def is_item_in_menu(self, name: str) -> bool:
        """检查品项是否存在于菜单中"""
        return self.find(name) is not None

    def get_item_price(self, name: str) -> Optional[ItemPriceInfo]:
        """取得品项的价格信息，找不到时返回 None"""
        entry = self.find(name)
        if entry is None:
            return None
        return ItemPriceInfo(
            category=entry.category.value,
            prices=dict(entry.prices),
            recommended=entry.recommended,
            special=entry.special,
        )

    def by_category(self, category: MenuCategory) -> List[MenuEntry]:
        return [e for e in self._entries if e.category == category]

    def recommended_items(self) -> List[MenuEntry]:
        return [e for e in self._entries if e.recommended]

    def special_items(self) -> List[MenuEntry]:
        return [e for e in self._entries if e.special]

    def to_prompt_json(self) -> str:
        """序列化为提示词中使用的菜单 JSON"""
        return json.dumps(self._raw, ensure_ascii=False)
