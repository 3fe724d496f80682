"""Gateway 启动入口 -- python -m yiwang.gateway

监听地址由 YIWANG_HOST / YIWANG_PORT 决定。
"""

import uvicorn

from .config import load_server_config


def main() -> None:
    config = load_server_config()
    uvicorn.run(
        "yiwang.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
