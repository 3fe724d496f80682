"""TaskStore SQLite 实现

Store 只负责加载/写回字段，状态机逻辑全部委托给 Task 模型方法。
读-改-写操作（改内容、复习）在 write_transaction 内完成，
同一任务的并发修改不会交错。
"""

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

import aiosqlite

from ..exceptions import StorageError, TaskNotFoundError
from ..models.enums import ReviewOutcome
from ..models.task import Task
from .transaction import write_transaction

_SELECT_COLUMNS = """
SELECT task_id, question, answer, stage, next_review_at,
       created_at, updated_at, completed_at
FROM tasks
"""


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """把 SQLite 驱动异常包装为 StorageError

    连接已关闭时 aiosqlite 抛 ValueError；损坏行解码失败同样是 ValueError。
    """
    try:
        yield
    except (aiosqlite.Error, ValueError) as e:
        raise StorageError(f"{operation} failed: {e}", original_error=e) from e


def _to_db_time(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _from_db_time(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        write_lock: asyncio.Lock | None = None,
    ) -> None:
        self._conn = conn
        self._write_lock = write_lock or asyncio.Lock()

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        with _storage_errors("create task"):
            async with write_transaction(self._conn, self._write_lock):
                await self._conn.execute(
                    """
                    INSERT INTO tasks (task_id, question, answer, stage, next_review_at,
                                       created_at, updated_at, completed_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        task.task_id,
                        task.question,
                        task.answer,
                        task.stage,
                        _to_db_time(task.next_review_at),
                        task.created_at.isoformat(),
                        task.updated_at.isoformat(),
                        _to_db_time(task.completed_at),
                    ),
                )

    async def get_task(self, task_id: str) -> Task:
        """根据 task_id 查询任务

        Raises:
            TaskNotFoundError: 任务不存在
        """
        with _storage_errors("get task"):
            return await self._fetch_task(task_id)

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 created_at 倒序"""
        with _storage_errors("list tasks"):
            cursor = await self._conn.execute(
                _SELECT_COLUMNS + " ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_task(row) for row in rows]

    async def update_content(
        self,
        task_id: str,
        question: str,
        answer: str,
        now: datetime,
    ) -> Task:
        """读-改-写：修改问题/答案并刷新 updated_at

        Raises:
            TaskNotFoundError: 任务不存在
            TaskValidationError: 内容为空（事务回滚，记录保持不变）
        """
        with _storage_errors("update task content"):
            async with write_transaction(self._conn, self._write_lock):
                task = await self._fetch_task(task_id)
                task.update_content(question, answer)
                task.updated_at = now
                await self._conn.execute(
                    """
                    UPDATE tasks
                    SET question = ?, answer = ?, updated_at = ?
                    WHERE task_id = ?
                    """,
                    (task.question, task.answer, task.updated_at.isoformat(), task.task_id),
                )
        return task

    async def apply_review(
        self,
        task_id: str,
        outcome: ReviewOutcome,
        now: datetime,
    ) -> Task:
        """读-改-写：应用复习结果（记住推进 / 忘记重置）

        Raises:
            TaskNotFoundError: 任务不存在
        """
        with _storage_errors("review task"):
            async with write_transaction(self._conn, self._write_lock):
                task = await self._fetch_task(task_id)
                if outcome == ReviewOutcome.REMEMBERED:
                    task.mark_remembered(now)
                else:
                    task.mark_forgot(now)
                await self._conn.execute(
                    """
                    UPDATE tasks
                    SET stage = ?, next_review_at = ?, completed_at = ?, updated_at = ?
                    WHERE task_id = ?
                    """,
                    (
                        task.stage,
                        _to_db_time(task.next_review_at),
                        _to_db_time(task.completed_at),
                        task.updated_at.isoformat(),
                        task.task_id,
                    ),
                )
        return task

    async def delete_task(self, task_id: str) -> None:
        """永久删除任务

        Raises:
            TaskNotFoundError: 任务不存在
        """
        with _storage_errors("delete task"):
            async with write_transaction(self._conn, self._write_lock):
                cursor = await self._conn.execute(
                    "DELETE FROM tasks WHERE task_id = ?",
                    (task_id,),
                )
                if cursor.rowcount == 0:
                    raise TaskNotFoundError(task_id)

    async def _fetch_task(self, task_id: str) -> Task:
        cursor = await self._conn.execute(
            _SELECT_COLUMNS + " WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            question=row[1],
            answer=row[2],
            stage=row[3],
            next_review_at=_from_db_time(row[4]),
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
            completed_at=_from_db_time(row[7]),
        )
