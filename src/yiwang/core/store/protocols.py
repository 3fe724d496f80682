"""Store Protocol 接口定义

定义 TaskStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from datetime import datetime
from typing import Protocol

from ..models.enums import ReviewOutcome
from ..models.task import Task


class TaskStore(Protocol):
    """Task 存储接口

    读-改-写操作必须在单个原子事务内完成，事务期间锁住目标记录。
    """

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task:
        """根据 task_id 查询任务，不存在时抛 TaskNotFoundError"""
        ...

    async def list_tasks(self) -> list[Task]:
        """查询全部任务"""
        ...

    async def update_content(
        self,
        task_id: str,
        question: str,
        answer: str,
        now: datetime,
    ) -> Task:
        """修改问题/答案（读-改-写）"""
        ...

    async def apply_review(
        self,
        task_id: str,
        outcome: ReviewOutcome,
        now: datetime,
    ) -> Task:
        """应用复习结果（读-改-写）"""
        ...

    async def delete_task(self, task_id: str) -> None:
        """删除任务，不存在时抛 TaskNotFoundError"""
        ...
