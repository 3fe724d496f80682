"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径与时钟等核心层配置。
"""

import os
from datetime import UTC, datetime
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("YIWANG_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "YIWANG_DB_PATH",
        str(_get_base_dir() / "sqlite" / "yiwang.db"),
    )


def utc_now() -> datetime:
    """默认时钟：带时区的 UTC 当前时间"""
    return datetime.now(UTC)
