"""Assistant Core 顶层包。

该包把 HTTP 请求转发给远程 Assistant 服务，
并在首次使用时自动准备（查询或创建）对应的 workspace。
包括配置加载、凭据解析、REST 客户端、workspace 准备与 HTTP 入口等能力。
"""

from assistant_core.api.service import forward_message, get_session

__all__ = ["forward_message", "get_session"]
