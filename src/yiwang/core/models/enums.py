"""枚举定义

包含派生状态 TaskStatus、复习结果 ReviewOutcome，
以及复习结果与状态筛选参数的解析函数。
"""

from enum import StrEnum

from ..exceptions import TaskValidationError


class TaskStatus(StrEnum):
    """任务派生状态 -- 从不落库，始终由 (stage, next_review_at, completed_at, now) 计算"""

    PENDING = "pending"
    READY = "ready"
    DONE = "done"


class ReviewOutcome(StrEnum):
    """复习结果"""

    REMEMBERED = "remembered"
    FORGOT = "forgot"


# 客户端可提交的复习结果别名
REVIEW_RESULT_ALIASES: dict[str, ReviewOutcome] = {
    "remembered": ReviewOutcome.REMEMBERED,
    "remember": ReviewOutcome.REMEMBERED,
    "ok": ReviewOutcome.REMEMBERED,
    "done": ReviewOutcome.REMEMBERED,
    "forgot": ReviewOutcome.FORGOT,
    "forget": ReviewOutcome.FORGOT,
    "miss": ReviewOutcome.FORGOT,
}

STATUS_FILTER_ALL = "all"


def parse_review_result(raw: str | None) -> ReviewOutcome:
    """解析复习结果（忽略大小写与首尾空白）

    Raises:
        TaskValidationError: 不在别名表中的取值
    """
    key = (raw or "").strip().lower()
    outcome = REVIEW_RESULT_ALIASES.get(key)
    if outcome is None:
        raise TaskValidationError("result must be 'remembered' or 'forgot'")
    return outcome


def parse_status_filter(raw: str | None) -> str | None:
    """解析列表筛选参数

    空值或 "all" 返回 None（不筛选）；其余取值原样（小写）返回，
    未知取值不报错，只是匹配不到任何任务。
    """
    value = (raw or "").strip().lower()
    if value in ("", STATUS_FILTER_ALL):
        return None
    return value
