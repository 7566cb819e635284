"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 API 层做统一捕获并映射为 HTTP 响应。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_CREDENTIALS"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如远程服务返回的原始 body）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(BusinessError):
    """凭据或端点配置缺失，首次使用时才会抛出。"""


class TrainingParseError(BusinessError):
    """内置训练文件缺失或格式错误，workspace 无法创建。"""


class ProvisioningError(BusinessError):
    """查询或创建 workspace 失败。

    对当前请求是致命的；由于失败不会被缓存，后续请求会重新尝试整个流程。
    """


class RemoteCallError(BusinessError):
    """调用远程 Assistant 服务失败的基类，原样向调用方传播，不做重试。"""


class NetworkError(RemoteCallError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(RemoteCallError):
    """远程 API 返回非 2xx 状态码时抛出，extra["body"] 保存原始响应。"""
