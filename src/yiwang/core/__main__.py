"""CLI 入口模块 -- python -m yiwang.core <command>

支持的命令：
  init-db  初始化 SQLite 数据库（建表 + 索引）
  due      列出当前待复习（ready）的任务
"""

import asyncio
import sys

from .config import get_db_path, utc_now


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m yiwang.core <command>")
        print("命令:")
        print("  init-db  初始化 SQLite 数据库")
        print("  due      列出当前待复习的任务")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "due":
        asyncio.run(list_due_tasks())
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, due")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库文件并初始化表结构"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def list_due_tasks() -> None:
    """打印当前 ready 状态的任务"""
    from .models import TaskStatus, total_stages
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        now = utc_now()
        tasks = await store_group.task_store.list_tasks()
        due = [t for t in tasks if t.status(now) == TaskStatus.READY]
        for task in due:
            print(f"{task.task_id}  [{task.stage}/{total_stages()}]  {task.question}")
        print(f"共 {len(due)} 条待复习")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
