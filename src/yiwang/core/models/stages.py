"""复习阶梯 -- 每次记住后距下一次复习的等待时长

索引即 stage：0: +5m, 1: +10m, 2: +25m, 3: +1h, 4: +6h, 5: +24h, 6: +48h, 7: +168h。
stage == total_stages() 表示已完成。进程级常量，不可由用户修改。
"""

from datetime import timedelta

STAGE_DURATIONS: tuple[timedelta, ...] = (
    timedelta(minutes=5),
    timedelta(minutes=10),
    timedelta(minutes=25),
    timedelta(hours=1),
    timedelta(hours=6),
    timedelta(hours=24),
    timedelta(hours=48),
    timedelta(hours=168),
)


def total_stages() -> int:
    """完成前的阶梯数量 N"""
    return len(STAGE_DURATIONS)
