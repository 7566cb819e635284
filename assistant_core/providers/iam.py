"""IAM token 管理。

apikey 模式下，每次请求前需要用 API key 换取 bearer token。
token 按 expiration 缓存，过期前 60 秒刷新；多个请求线程共享同一个实例，
刷新过程由锁保护。
"""

import threading
import time
from typing import Optional

import httpx

from assistant_core.domain.exceptions import ApiError, NetworkError
from assistant_core.infrastructure.logging.logger import logger


IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
REFRESH_MARGIN_SECONDS = 60


class IamTokenManager:
    def __init__(self, api_key: str, iam_url: str, timeout: Optional[float] = None):
        self._api_key = api_key
        self._iam_url = iam_url
        self._timeout = timeout
        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def get_token(self) -> str:
        """返回可用的 access token，必要时向 IAM 重新申请。"""

        with self._lock:
            if self._token and time.time() < self._expires_at - REFRESH_MARGIN_SECONDS:
                return self._token
            self._token, self._expires_at = self._request_token()
            return self._token

    def _request_token(self) -> tuple[str, float]:
        try:
            with httpx.Client(timeout=self._timeout, trust_env=False) as client:
                resp = client.post(
                    self._iam_url,
                    data={"grant_type": IAM_GRANT_TYPE, "apikey": self._api_key},
                    headers={"Accept": "application/json"},
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), http_status=502)
        if resp.status_code >= 400:
            logger.error(
                "IAM token request failed",
                extra={"extra": {"status": resp.status_code}},
            )
            raise ApiError(
                code="IAM_ERROR",
                message=resp.text,
                http_status=resp.status_code,
                body=response_body(resp),
            )
        data = response_body(resp)
        if not isinstance(data, dict) or not data.get("access_token"):
            raise ApiError(
                code="IAM_ERROR",
                message="IAM response has no access_token",
                http_status=502,
                body=data if data is not None else resp.text,
            )
        try:
            expiration = data.get("expiration")
            if expiration is None:
                expiration = time.time() + float(data.get("expires_in", 0))
            expiration = float(expiration)
        except (TypeError, ValueError):
            raise ApiError(
                code="IAM_ERROR",
                message="IAM response has an invalid expiration",
                http_status=502,
                body=data,
            )
        return data["access_token"], expiration


def response_body(resp):
    """尽量把错误响应解析为 JSON，失败时返回 None。"""
    try:
        return resp.json()
    except ValueError:
        return None
