"""yiwang 异常体系

错误分类与 HTTP 状态码映射（映射在 gateway 层完成）：
- TaskValidationError -> 400
- TaskNotFoundError -> 404
- StorageError -> 500
"""


class YiwangError(Exception):
    """yiwang 基础异常"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskValidationError(YiwangError):
    """输入校验失败（问题/答案为空、复习结果非法等）

    在任何持久化调用之前抛出。
    """


class TaskNotFoundError(YiwangError):
    """任务不存在 -- 由 Store 抛出，handler 原样透传"""

    def __init__(self, task_id: str) -> None:
        """
        Args:
            task_id: 未找到的任务 ID
        """
        super().__init__("task not found")
        self.task_id = task_id


class StorageError(YiwangError):
    """持久化失败（SQLite 异常统一包装）"""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Args:
            message: 错误描述
            original_error: 底层驱动异常
        """
        super().__init__(message)
        self.original_error = original_error
