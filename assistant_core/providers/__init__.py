"""Assistant 服务集成层。

该包下的模块负责：
- 从配置解析凭据 (credentials)。
- IAM token 的申请与缓存 (iam)。
- Assistant REST 接口的具体调用 (assistant_client)。
"""

from typing import Optional

from assistant_core.config.settings import settings
from assistant_core.providers.assistant_client import AssistantClient
from assistant_core.providers.credentials import resolve_credentials


def create_client(config=None) -> AssistantClient:
    """根据配置创建 AssistantClient，默认取全局 settings。"""

    cfg = config or settings
    credentials = resolve_credentials(cfg)
    return AssistantClient(
        credentials,
        version=getattr(cfg, "assistant_version", None) or "2018-07-10",
        timeout=getattr(cfg, "http_timeout", None),
        iam_url=getattr(cfg, "iam_url", None),
    )
