"""读-改-写原子事务封装

SQLite 没有行锁，这里用 BEGIN IMMEDIATE 在读之前就拿到数据库写锁，
锁覆盖整个 读取 -> 计算 -> 写回 序列，直到 commit/rollback。
多个协程共享同一个连接，同一时刻只能有一个事务，因此再加一把 asyncio.Lock。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection,
    lock: asyncio.Lock,
) -> AsyncIterator[aiosqlite.Connection]:
    """在写锁内执行读-改-写序列

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）
        lock: 序列化该连接上所有写事务的协程锁

    Raises:
        Exception: 块内任何异常都会触发回滚并原样抛出
    """
    async with lock:
        await conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            await conn.commit()
        except BaseException:
            # CancelledError 也要回滚
            await conn.rollback()
            raise
