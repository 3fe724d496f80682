"""gateway 测试配置 -- FastAPI app + httpx AsyncClient + 可控时钟"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from yiwang.core.store import create_store_group


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, clock):
    """创建测试用 FastAPI app 实例（绕过 lifespan 手动初始化）"""
    os.environ["YIWANG_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from yiwang.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    app.state.store_group = store_group
    app.state.clock = clock

    yield app

    await store_group.conn.close()
    os.environ.pop("YIWANG_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
