from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

from sqlalchemy import delete
from sqlalchemy.orm import Session, sessionmaker

from app.core.logger import logger
from app.models.storage import KeyValueEntry


class KeyValueStore(Protocol):
    """答题状态的持久化端口，值统一为字符串（通常是 JSON 文本）。"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryKeyValueStore:
    """进程内存储，主要用于测试与一次性会话。"""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class SqlKeyValueStore:
    """基于 SQLAlchemy 的键值存储，每次写入立即提交。"""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def delete(self, key: str) -> None:
        with self._session_factory() as session:
            session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
            session.commit()

    def clear(self) -> None:
        with self._session_factory() as session:
            session.execute(delete(KeyValueEntry))
            session.commit()


class JsonFileKeyValueStore:
    """将全部键值写入单个 JSON 文件，读写均整体进行。"""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"存储文件无法解析，按空状态处理: {self.path} ({e})")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"存储文件根节点不是对象，按空状态处理: {self.path}")
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # 先写临时文件再替换，写入中断时原文件保持完整
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    def clear(self) -> None:
        self._dump({})
