"""凭据解析。

只读取配置，不做任何网络请求：
- service_apikey 存在时使用 IAM（apikey 模式），忽略用户名/密码；
- 否则使用 Basic 认证，未配置的用户名/密码按空串处理，
  是否有效由远程服务在第一次调用时判断。
"""

from assistant_core.domain.exceptions import ConfigurationError
from assistant_core.domain.models import Credentials


def resolve_credentials(config) -> Credentials:
    """根据配置对象生成 Credentials。

    Raises:
        ConfigurationError: 未配置 service_url。
    """

    url = getattr(config, "service_url", None)
    if not url:
        raise ConfigurationError(
            code="MISSING_CREDENTIALS",
            message="service_url not set",
            http_status=500,
        )
    api_key = getattr(config, "service_apikey", None)
    if api_key:
        return Credentials(mode="apikey", endpoint_url=url, api_key=api_key)
    return Credentials(
        mode="basic",
        endpoint_url=url,
        username=getattr(config, "service_username", None) or "",
        password=getattr(config, "service_password", None) or "",
    )
