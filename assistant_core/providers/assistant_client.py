"""Assistant v1 REST 适配器。

本模块负责：

1. 根据 Credentials 为每次请求附加认证信息（IAM bearer token 或 Basic）。
2. 调用 workspaces 列表 / 创建 / message 三个接口。
3. 把网络错误、非 2xx 响应以及无法解析为 JSON 对象的响应包装为 NetworkError / ApiError。

message 接口的响应 JSON 原样返回，不做任何裁剪或补充。
"""

from typing import Any, Dict, List, Optional

import httpx

from assistant_core.domain.exceptions import ApiError, NetworkError
from assistant_core.domain.models import Credentials, InboundMessage, Workspace
from assistant_core.providers.iam import IamTokenManager, response_body
from assistant_core.workspace.training import TrainingDefinition


class AssistantClient:
    """Assistant 服务客户端。

    - credentials: 创建时解析好的凭据，之后不再变化。
    - 每次调用新建 httpx.Client，进程内唯一的状态是 IAM token 缓存。
    """

    def __init__(
        self,
        credentials: Credentials,
        version: str,
        timeout: Optional[float] = None,
        iam_url: Optional[str] = None,
    ):
        self._credentials = credentials
        self._version = version
        self._timeout = timeout
        self._token_manager: Optional[IamTokenManager] = None
        if credentials.mode == "apikey":
            self._token_manager = IamTokenManager(
                api_key=credentials.api_key,
                iam_url=iam_url or "https://iam.cloud.ibm.com/identity/token",
                timeout=timeout,
            )

    @property
    def endpoint_url(self) -> str:
        return self._credentials.endpoint_url

    def list_workspaces(self) -> List[Workspace]:
        """列出账号下的 workspace，保持远程返回的顺序。"""

        data = self._request("GET", "/v1/workspaces")
        items = data.get("workspaces") or []
        try:
            return [Workspace.from_payload(item) for item in items]
        except (KeyError, TypeError) as e:
            raise ApiError(
                code="INVALID_RESPONSE",
                message=f"Malformed workspace listing: {e}",
                http_status=502,
                body=data,
            )

    def create_workspace(self, definition: TrainingDefinition) -> Workspace:
        data = self._request("POST", "/v1/workspaces", json=definition.to_payload())
        if not data.get("workspace_id"):
            raise ApiError(
                code="INVALID_RESPONSE",
                message="Create workspace response has no workspace_id",
                http_status=502,
                body=data,
            )
        return Workspace.from_payload(data)

    def message(self, workspace_id: str, inbound: InboundMessage) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/v1/workspaces/{workspace_id}/message",
            json=inbound.to_payload(),
        )

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        headers = {"Accept": "application/json"}
        auth = None
        if self._token_manager is not None:
            headers["Authorization"] = f"Bearer {self._token_manager.get_token()}"
        else:
            auth = (self._credentials.username or "", self._credentials.password or "")
        try:
            with httpx.Client(timeout=self._timeout, trust_env=False) as client:
                resp = client.request(
                    method,
                    f"{self.endpoint_url}{path}",
                    params={"version": self._version},
                    json=json,
                    headers=headers,
                    auth=auth,
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), http_status=502)
        if resp.status_code >= 400:
            raise ApiError(
                code="API_ERROR",
                message=resp.text,
                http_status=resp.status_code,
                body=response_body(resp),
            )
        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise ApiError(
                code="INVALID_RESPONSE",
                message=f"Unexpected response from {path}",
                http_status=502,
                body=resp.text,
            )
        return data
