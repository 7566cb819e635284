"""使用 uvicorn 启动 HTTP 服务：python -m assistant_core"""

import uvicorn

from assistant_core.config.settings import settings


if __name__ == "__main__":
    uvicorn.run("assistant_core.api.app:app", host=settings.host, port=settings.port, reload=False)
