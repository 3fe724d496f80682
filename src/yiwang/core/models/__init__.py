"""yiwang Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    REVIEW_RESULT_ALIASES,
    STATUS_FILTER_ALL,
    ReviewOutcome,
    TaskStatus,
    parse_review_result,
    parse_status_filter,
)
from .stages import STAGE_DURATIONS, total_stages
from .task import Task, normalize_content

__all__ = [
    # 枚举
    "TaskStatus",
    "ReviewOutcome",
    "REVIEW_RESULT_ALIASES",
    "STATUS_FILTER_ALL",
    "parse_review_result",
    "parse_status_filter",
    # 阶梯
    "STAGE_DURATIONS",
    "total_stages",
    # Task
    "Task",
    "normalize_content",
]
