"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与时钟

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from collections.abc import Callable
from datetime import datetime

from fastapi import Depends, Request
from yiwang.core.config import utc_now
from yiwang.core.store import StoreGroup

from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_clock(request: Request) -> Callable[[], datetime]:
    """从 app.state 获取时钟，未设置时使用 UTC 系统时间"""
    return getattr(request.app.state, "clock", None) or utc_now


def get_task_service(
    store_group: StoreGroup = Depends(get_store_group),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskService:
    """每个请求构建一个 TaskService"""
    return TaskService(store_group, clock)
