"""ServerConfig -- Gateway 配置加载

从环境变量加载监听地址、API 前缀与前端静态目录。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class ServerConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        YIWANG_HOST: 监听地址（默认 0.0.0.0）
        YIWANG_PORT: 监听端口（默认 8080）
        YIWANG_API_PREFIX: API 路由前缀（默认 /api）
        YIWANG_WEB_DIR: 前端静态文件目录（默认 web，不存在时不挂载）
    """

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=8080, ge=1, le=65535, description="监听端口")
    api_prefix: str = Field(default="/api", description="API 路由前缀")
    web_dir: str = Field(default="web", description="前端静态文件目录")


def load_server_config() -> ServerConfig:
    """从环境变量加载 Gateway 配置

    Returns:
        ServerConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("YIWANG_HOST"):
        kwargs["host"] = val
    if val := os.environ.get("YIWANG_PORT"):
        try:
            kwargs["port"] = int(val)
        except ValueError:
            log.warning("invalid_port_env", value=val, fallback=8080)
    if (val := os.environ.get("YIWANG_API_PREFIX")) is not None:
        kwargs["api_prefix"] = val.rstrip("/")
    if val := os.environ.get("YIWANG_WEB_DIR"):
        kwargs["web_dir"] = val

    return ServerConfig(**kwargs)
