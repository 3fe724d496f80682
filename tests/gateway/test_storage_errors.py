"""存储故障 -> HTTP 500 测试

测试内容：
1. 表被删除时各端点返回 500 + {"error": ...}
2. 连接已关闭时同样返回 JSON 错误体
"""

from httpx import ASGITransport, AsyncClient


async def _request_all(ac: AsyncClient, task_id: str) -> list:
    return [
        await ac.get("/api/tasks"),
        await ac.get("/api/tasks/ready"),
        await ac.get(f"/api/tasks/{task_id}"),
        await ac.post("/api/tasks", json={"question": "q", "answer": "a"}),
        await ac.put(f"/api/tasks/{task_id}", json={"question": "q2", "answer": "a2"}),
        await ac.post(f"/api/tasks/{task_id}/review", json={"result": "remembered"}),
        await ac.delete(f"/api/tasks/{task_id}"),
    ]


class TestStorageFailures:
    async def test_dropped_table_returns_json_500(self, client: AsyncClient, test_app):
        created = await client.post("/api/tasks", json={"question": "q", "answer": "a"})
        task_id = created.json()["id"]

        conn = test_app.state.store_group.conn
        await conn.execute("DROP TABLE tasks")
        await conn.commit()

        for resp in await _request_all(client, task_id):
            assert resp.status_code == 500
            body = resp.json()
            assert set(body) == {"error"}
            assert "no such table" in body["error"]

    async def test_closed_connection_returns_json_500(self, test_app):
        await test_app.state.store_group.conn.close()

        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://test",
        ) as ac:
            responses = await _request_all(ac, "01HZX3M8Y6T4W2Q9R7P5N3K1JA")

        for resp in responses:
            assert resp.status_code == 500
            body = resp.json()
            assert set(body) == {"error"}
            assert "failed" in body["error"]

    async def test_list_error_message_names_operation(self, client: AsyncClient, test_app):
        conn = test_app.state.store_group.conn
        await conn.execute("DROP TABLE tasks")
        await conn.commit()

        resp = await client.get("/api/tasks")
        assert resp.json() == {"error": "list tasks failed: no such table: tasks"}
