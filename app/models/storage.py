"""键值存储相关模型"""

from datetime import datetime

import sqlalchemy
from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.sql import Base


class KeyValueEntry(Base):
    """持久化的键值对，值为序列化后的 JSON 文本"""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(200), primary_key=True, comment="存储键")
    value: Mapped[str] = mapped_column(Text, nullable=False, comment="存储值(JSON文本)")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=sqlalchemy.func.now(),
        onupdate=sqlalchemy.func.now(),
        comment="更新时间",
    )

    __table_args__ = (Index("idx_kv_updated_at", "updated_at"),)
