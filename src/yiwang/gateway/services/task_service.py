"""TaskService -- 任务创建/查询/修改/复习/删除业务逻辑

请求 -> Task 模型操作 -> Store 持久化：
1. 输入校验在任何 Store 调用之前完成
2. now 由注入的 clock 提供，Task 模型从不读取系统时间
3. TaskNotFoundError / StorageError 由 Store 抛出，原样透传给 handler
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from pydantic import BaseModel, ConfigDict, Field
from yiwang.core.config import utc_now
from yiwang.core.models import (
    Task,
    TaskStatus,
    normalize_content,
    parse_review_result,
    parse_status_filter,
    total_stages,
)
from yiwang.core.store import StoreGroup

log = structlog.get_logger()


class TaskResponse(BaseModel):
    """任务对外 JSON 表示（camelCase，未设置的时间字段省略）"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    answer: str
    stage: int
    total_stages: int = Field(alias="totalStages")
    status: TaskStatus
    next_review_at: datetime | None = Field(default=None, alias="nextReviewAt")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskService:
    """任务业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._stores = store_group
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    async def create_task(self, question: str | None, answer: str | None) -> Task:
        """创建任务（stage 0，首次复习 now + ladder[0]）"""
        task = Task.create(question, answer, self.now())
        await self._stores.task_store.create_task(task)
        log.info("task_created", task_id=task.task_id)
        return task

    async def get_task(self, task_id: str) -> Task:
        """查询任务详情"""
        return await self._stores.task_store.get_task(task_id)

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """查询任务列表，按派生状态筛选；空值或 all 不筛选"""
        wanted = parse_status_filter(status)
        tasks = await self._stores.task_store.list_tasks()
        if wanted is None:
            return tasks
        now = self.now()
        return [t for t in tasks if t.status(now) == wanted]

    async def list_ready(self) -> list[Task]:
        """查询当前到期（ready）的任务"""
        return await self.list_tasks(TaskStatus.READY)

    async def update_content(
        self, task_id: str, question: str | None, answer: str | None
    ) -> Task:
        """修改问题/答案"""
        question, answer = normalize_content(question, answer)
        task = await self._stores.task_store.update_content(
            task_id, question, answer, self.now()
        )
        log.info("task_content_updated", task_id=task_id)
        return task

    async def review(self, task_id: str, result: str | None) -> Task:
        """应用复习结果

        Raises:
            TaskValidationError: result 不在别名表中
            TaskNotFoundError: 任务不存在
        """
        outcome = parse_review_result(result)
        task = await self._stores.task_store.apply_review(task_id, outcome, self.now())
        log.info(
            "task_reviewed",
            task_id=task_id,
            outcome=outcome.value,
            stage=task.stage,
            completed=task.completed_at is not None,
        )
        return task

    async def delete_task(self, task_id: str) -> None:
        """永久删除任务"""
        await self._stores.task_store.delete_task(task_id)
        log.info("task_deleted", task_id=task_id)

    def to_response(self, task: Task, now: datetime | None = None) -> TaskResponse:
        """构建对外表示，status 按 now 派生"""
        now = now or self.now()
        return TaskResponse(
            id=task.task_id,
            question=task.question,
            answer=task.answer,
            stage=task.stage,
            total_stages=total_stages(),
            status=task.status(now),
            next_review_at=task.next_review_at,
            created_at=task.created_at,
            updated_at=task.updated_at,
            completed_at=task.completed_at,
        )
