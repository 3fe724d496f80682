"""Task Domain Model -- 间隔重复状态机

所有状态流转都以显式传入的 now 为准，模型内部从不读取系统时间。
stage 取值 [0, N]，N = total_stages()；stage == N 即已完成。
"""

from datetime import datetime

from pydantic import BaseModel, Field
from ulid import ULID

from ..exceptions import TaskValidationError
from .enums import TaskStatus
from .stages import STAGE_DURATIONS, total_stages


def normalize_content(question: str | None, answer: str | None) -> tuple[str, str]:
    """去除首尾空白并校验问题/答案非空

    Raises:
        TaskValidationError: 任一字段去空白后为空
    """
    q = (question or "").strip()
    a = (answer or "").strip()
    if not q or not a:
        raise TaskValidationError("question and answer are required")
    return q, a


class Task(BaseModel):
    """问答卡片 -- 按固定阶梯推进复习"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    question: str = Field(description="问题（已去首尾空白）")
    answer: str = Field(description="答案（已去首尾空白）")
    stage: int = Field(
        default=0, ge=0, le=total_stages(), description="阶梯位置，N 表示已完成"
    )
    next_review_at: datetime | None = Field(default=None, description="下一次复习时间")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
    completed_at: datetime | None = Field(default=None, description="完成时间")

    @classmethod
    def create(cls, question: str | None, answer: str | None, now: datetime) -> "Task":
        """新建 stage 0 任务，首次复习安排在 now + ladder[0]"""
        q, a = normalize_content(question, answer)
        return cls(
            task_id=str(ULID()),
            question=q,
            answer=a,
            stage=0,
            next_review_at=now + STAGE_DURATIONS[0],
            created_at=now,
            updated_at=now,
        )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None or self.stage >= total_stages()

    def status(self, now: datetime) -> TaskStatus:
        """派生状态：done 优先，其次按 next_review_at <= now 判定 ready"""
        if self.is_completed:
            return TaskStatus.DONE
        if self.next_review_at is None or self.next_review_at <= now:
            return TaskStatus.READY
        return TaskStatus.PENDING

    def mark_remembered(self, now: datetime) -> None:
        """记住：推进到下一阶；最后一阶时标记完成。已完成时为 no-op。"""
        if self.completed_at is not None:
            return

        if self.stage >= total_stages() - 1:
            self.stage = total_stages()
            self.next_review_at = None
            self.completed_at = now
            self.updated_at = now
            return

        self.stage += 1
        # 使用自增后的 stage 取时长：0 -> 1 用 ladder[1]
        self.next_review_at = now + STAGE_DURATIONS[self.stage]
        self.updated_at = now

    def mark_forgot(self, now: datetime) -> None:
        """忘记：无条件重置到 stage 0，已完成的任务也会被重新激活"""
        self.stage = 0
        self.completed_at = None
        self.next_review_at = now + STAGE_DURATIONS[0]
        self.updated_at = now

    def update_content(self, question: str, answer: str) -> None:
        """修改问题/答案文本；updated_at 由调用方负责设置"""
        q, a = normalize_content(question, answer)
        self.question = q
        self.answer = a
