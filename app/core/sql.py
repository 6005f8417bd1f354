from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import config
from app.core.logger import logger


class Base(DeclarativeBase):
    pass


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    """创建同步数据库引擎，sqlite 下允许跨线程复用连接。"""
    url = db_url or config.db_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = create_db_engine()
session_maker: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)


def load_db(bind: Optional[Engine] = None) -> None:
    """创建所有已注册的数据表。"""
    # 导入模型以完成注册
    import app.models  # noqa: F401

    target = bind or engine
    logger.info(f"初始化数据库: {target.url}")
    Base.metadata.create_all(target)


def close_db(bind: Optional[Engine] = None) -> None:
    (bind or engine).dispose()
