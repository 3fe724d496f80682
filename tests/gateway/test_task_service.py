"""TaskService 测试

覆盖：
1. 校验在 Store 调用之前完成
2. 状态筛选使用注入的时钟
3. 对外表示的字段省略规则
"""

from datetime import timedelta
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from yiwang.core.exceptions import TaskValidationError
from yiwang.core.store import create_store_group
from yiwang.gateway.services.task_service import TaskService


@pytest_asyncio.fixture
async def service_with_store(tmp_path: Path, clock):
    store_group = await create_store_group(str(tmp_path / "sqlite" / "service.db"))
    service = TaskService(store_group, clock)

    yield service, store_group

    await store_group.conn.close()


class TestTaskService:
    async def test_validation_precedes_store_calls(self, service_with_store, monkeypatch):
        service, store_group = service_with_store
        update_mock = AsyncMock()
        review_mock = AsyncMock()
        monkeypatch.setattr(store_group.task_store, "update_content", update_mock)
        monkeypatch.setattr(store_group.task_store, "apply_review", review_mock)

        with pytest.raises(TaskValidationError):
            await service.update_content("01ANYTHING0000000000000000", " ", "a")
        with pytest.raises(TaskValidationError):
            await service.review("01ANYTHING0000000000000000", "perhaps")

        update_mock.assert_not_awaited()
        review_mock.assert_not_awaited()

    async def test_list_filters_with_injected_clock(self, service_with_store, clock):
        service, _ = service_with_store
        task = await service.create_task("q", "a")

        assert await service.list_ready() == []
        assert [t.task_id for t in await service.list_tasks("pending")] == [task.task_id]

        clock.advance(minutes=5)
        assert [t.task_id for t in await service.list_ready()] == [task.task_id]
        assert await service.list_tasks("pending") == []
        assert len(await service.list_tasks("all")) == 1

    async def test_response_omits_unset_times(self, service_with_store, clock):
        service, _ = service_with_store
        task = await service.create_task("q", "a")
        data = service.to_response(task).to_json()
        assert set(data) == {
            "id",
            "question",
            "answer",
            "stage",
            "totalStages",
            "status",
            "nextReviewAt",
            "createdAt",
            "updatedAt",
        }

        for _ in range(8):
            clock.advance(days=8)
            task = await service.review(task.task_id, "remembered")
        data = service.to_response(task).to_json()
        assert "nextReviewAt" not in data
        assert "completedAt" in data
        assert data["status"] == "done"

    async def test_status_derived_at_given_time(self, service_with_store, clock):
        service, _ = service_with_store
        task = await service.create_task("q", "a")
        later = clock.now + timedelta(hours=1)
        assert service.to_response(task, later).status == "ready"
        assert service.to_response(task).status == "pending"
