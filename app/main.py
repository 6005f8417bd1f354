from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import assessment, majors, report
from app.core.config import config
from app.core.logger import logger
from app.core.sql import close_db, load_db

logger.info("初始化 Server...")


# 启动/关闭事件
@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.storage_backend == "sqlite":
        load_db()
    yield
    logger.info("正在退出...")
    close_db()
    logger.info("已安全退出")


app = FastAPI(title=config.title, version=config.version, lifespan=lifespan)

# 配置 CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins,
    allow_credentials=config.cors_allow_credentials,
    allow_methods=config.cors_allow_methods,
    allow_headers=config.cors_allow_headers,
)

# 注册 API 路由
app.include_router(assessment.router, prefix="/api/assessment", tags=["assessment"])
app.include_router(report.router, prefix="/api/report", tags=["report"])
app.include_router(majors.router, prefix="/api/majors", tags=["majors"])

if __name__ == "__main__":
    import uvicorn

    logger.info(f"服务器地址: http://{config.host}:{config.port}")
    logger.info(f"FastAPI 文档地址: http://{config.host}:{config.port}/docs")
    logger.info(f"OpenAPI JSON 地址: http://{config.host}:{config.port}/openapi.json")
    uvicorn.run(app, host=config.host, port=config.port)
