"""领域数据模型。

- Credentials: 从配置解析出的认证信息（apikey 或 basic 二选一）。
- Workspace: 远程 workspace 列表中的一项。
- InboundMessage: 一次入站请求中需要转发的内容。

TrainingDefinition 需要宽松解析 JSON，定义在 workspace.training 中。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional


# 认证模式：IAM API key 或 用户名/密码
AuthMode = Literal["apikey", "basic"]


@dataclass(frozen=True)
class Credentials:
    """解析后的服务凭据。

    不变式：mode 为 "apikey" 时只有 api_key 有值；
    mode 为 "basic" 时只有 username/password 有值（可以是空串）。
    endpoint_url 始终存在。
    """

    mode: AuthMode
    endpoint_url: str
    api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        # 避免在日志中输出密钥
        return f"Credentials(mode={self.mode!r}, endpoint_url={self.endpoint_url!r})"


@dataclass(frozen=True)
class Workspace:
    """远程 workspace 摘要。"""

    workspace_id: str
    name: Optional[str] = None
    language: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Workspace":
        return cls(
            workspace_id=data["workspace_id"],
            name=data.get("name"),
            language=data.get("language"),
            raw=data,
        )


@dataclass
class InboundMessage:
    """一次入站消息。

    - text: 用户输入文本。
    - context: 调用方持有的会话状态，原样转发，不做任何解析。
    """

    text: str
    context: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"input": {"text": self.text}}
        if self.context is not None:
            payload["context"] = self.context
        return payload
