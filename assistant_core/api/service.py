"""对外 API 服务模块。

维护进程内唯一的 AssistantSession（客户端 + workspace id），
并提供 forward_message 供 HTTP 层调用。
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from assistant_core.config.settings import settings
from assistant_core.domain.exceptions import BusinessError, ProvisioningError
from assistant_core.domain.models import InboundMessage
from assistant_core.infrastructure.logging.logger import logger
from assistant_core.providers import create_client
from assistant_core.providers.assistant_client import AssistantClient
from assistant_core.workspace.provisioner import resolve_workspace_id


@dataclass(frozen=True)
class AssistantSession:
    """客户端与 workspace id 总是一起出现。"""

    client: AssistantClient
    workspace_id: str


_session: Optional[AssistantSession] = None
_session_lock = threading.Lock()


def get_session() -> AssistantSession:
    """获取进程内的 AssistantSession（单例）。

    首次调用时解析凭据、创建客户端并准备 workspace；
    并发的首次调用会阻塞等待同一次初始化完成。
    初始化失败不会留下任何状态，下一次调用会重新开始。
    """
    global _session
    session = _session
    if session is not None:
        return session
    with _session_lock:
        if _session is None:
            client = create_client(settings)
            workspace_id = resolve_workspace_id(client, settings)
            _session = AssistantSession(client=client, workspace_id=workspace_id)
        return _session


def forward_message(inbound: Optional[InboundMessage]) -> Optional[Dict[str, Any]]:
    """把一条入站消息转发给 Assistant。

    Args:
        inbound: 入站消息，为空时只记录警告，不做任何远程调用。

    Returns:
        远程 message 接口的原始 JSON；入站消息为空时返回 None。

    Raises:
        各种 domain.exceptions 中定义的异常
    """
    if inbound is None:
        logger.warning("Call to /api/message with an empty body")
        return None
    try:
        session = get_session()
        return session.client.message(session.workspace_id, inbound)
    except BusinessError as e:
        # workspace 准备失败已在 provisioner 中记录
        log = logger.debug if isinstance(e, ProvisioningError) else logger.error
        log(f"Message failed: {e}", extra={"extra": {
            "code": e.code,
            "status": e.http_status,
        }})
        raise
