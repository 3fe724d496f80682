"""任务路由

POST   /tasks              创建任务（201）
GET    /tasks?status=...   任务列表，按派生状态筛选
GET    /tasks/ready        到期待复习任务
GET    /tasks/{task_id}    任务详情
PUT    /tasks/{task_id}    修改问题/答案（PATCH 同义）
DELETE /tasks/{task_id}    删除任务（204）
POST   /tasks/{task_id}/review  提交复习结果

错误（400/404/500）由 main.py 注册的异常处理器统一转换为 {"error": message}。
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, Response

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class TaskContentRequest(BaseModel):
    """创建/修改任务请求体"""

    question: str | None = Field(default="", description="问题")
    answer: str | None = Field(default="", description="答案")


class ReviewRequest(BaseModel):
    """复习结果请求体"""

    result: str | None = Field(
        default="", description="remembered / forgot 及其别名，null 视同空串"
    )


@router.post("/tasks", status_code=201)
async def create_task(
    body: TaskContentRequest,
    service: TaskService = Depends(get_task_service),
):
    """创建任务 -- 问题或答案为空返回 400"""
    task = await service.create_task(body.question, body.answer)
    return JSONResponse(
        status_code=201,
        content=service.to_response(task).to_json(),
    )


@router.get("/tasks")
async def list_tasks(
    status: str | None = Query(default=None, description="all / ready / pending / done"),
    service: TaskService = Depends(get_task_service),
):
    """查询任务列表，按派生状态筛选"""
    tasks = await service.list_tasks(status)
    now = service.now()
    return JSONResponse(content=[service.to_response(t, now).to_json() for t in tasks])


@router.get("/tasks/ready")
async def list_ready_tasks(service: TaskService = Depends(get_task_service)):
    """查询当前到期的任务"""
    tasks = await service.list_ready()
    now = service.now()
    return JSONResponse(content=[service.to_response(t, now).to_json() for t in tasks])


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    task = await service.get_task(task_id)
    return JSONResponse(content=service.to_response(task).to_json())


@router.put("/tasks/{task_id}")
@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskContentRequest,
    service: TaskService = Depends(get_task_service),
):
    """修改问题/答案 -- 不存在返回 404，内容为空返回 400"""
    task = await service.update_content(task_id, body.question, body.answer)
    return JSONResponse(content=service.to_response(task).to_json())


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    await service.delete_task(task_id)
    return Response(status_code=204)


@router.post("/tasks/{task_id}/review")
async def review_task(
    task_id: str,
    body: ReviewRequest,
    service: TaskService = Depends(get_task_service),
):
    """提交复习结果

    - remembered / remember / ok / done -> 推进一阶（最后一阶则完成）
    - forgot / forget / miss -> 重置到第 0 阶
    - 其他取值 -> 400
    """
    task = await service.review(task_id, body.result)
    return JSONResponse(content=service.to_response(task).to_json())
