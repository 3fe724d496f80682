"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 路由注册 + 错误映射 + 前端静态文件。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.responses import JSONResponse
from yiwang.core.config import get_db_path, utc_now
from yiwang.core.exceptions import StorageError, TaskNotFoundError, TaskValidationError
from yiwang.core.store import create_store_group

from .config import ServerConfig, load_server_config
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.clock = utc_now
    log.info("store_initialized", db_path=db_path)

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_validation_error(request: Request, exc: TaskValidationError) -> JSONResponse:
    return _error_response(400, exc.message)


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(400, "invalid json")


async def _handle_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return _error_response(404, exc.message)


async def _handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    log.error(
        "storage_error",
        error=exc.message,
        error_type=type(exc.original_error).__name__ if exc.original_error else None,
    )
    return _error_response(500, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """错误分类 -> HTTP 状态码：校验 400 / 不存在 404 / 存储 500"""
    app.add_exception_handler(TaskValidationError, _handle_validation_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(TaskNotFoundError, _handle_not_found)
    app.add_exception_handler(StorageError, _handle_storage_error)


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """创建 FastAPI 应用实例"""
    config = config or load_server_config()

    app = FastAPI(
        title="yiwang",
        version="0.1.0",
        description="间隔重复问答卡片 API",
        lifespan=lifespan,
    )
    app.state.server_config = config

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware, api_prefix=config.api_prefix)

    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)

    app.include_router(tasks.router, prefix=config.api_prefix, tags=["tasks"])
    app.include_router(health.router, prefix=config.api_prefix, tags=["health"])

    # 前端静态文件在所有 API 路由之后挂载，确保 API 优先匹配
    web_dir = Path(config.web_dir)
    if web_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(web_dir), html=True), name="web")

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
