from functools import lru_cache

from fastapi import Depends

from app.core.config import config
from app.core.sql import session_maker
from app.repositories.catalog import CatalogRepository
from app.repositories.storage import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    SqlKeyValueStore,
)
from app.services.assessment_service import AssessmentService


# 同步存储在 async 路由中直接调用，请求串行执行以保证读改写不交错
@lru_cache
def get_store() -> KeyValueStore:
    """根据配置选择答题状态的存储后端，进程内只创建一次。"""
    if config.storage_backend == "memory":
        return MemoryKeyValueStore()
    if config.storage_backend == "file":
        return JsonFileKeyValueStore(config.storage_file)
    return SqlKeyValueStore(session_maker)


@lru_cache
def get_catalog() -> CatalogRepository:
    return CatalogRepository(config.data_dir)


def get_assessment_service(
    store: KeyValueStore = Depends(get_store),
    catalog: CatalogRepository = Depends(get_catalog),
) -> AssessmentService:
    return AssessmentService(store, catalog)
