"""配置管理模块。

支持从 .env、config.yaml 以及环境变量加载配置。
凭据相关字段同时接受旧版 watson_conversation_* 键名。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("ASSISTANT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class AssistantSettings(BaseSettings):
    """配置设置（使用 Pydantic）。

    凭据字段只在首次处理消息时才被读取和校验，
    因此缺失配置不会阻止服务启动。
    """

    # ---- 远程 Assistant 服务 ----
    service_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("service_url", "watson_conversation_url"),
        description="Assistant 服务端点 URL",
    )
    service_username: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("service_username", "watson_conversation_username"),
        description="Basic 认证用户名",
    )
    service_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("service_password", "watson_conversation_password"),
        description="Basic 认证密码",
    )
    service_apikey: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("service_apikey", "watson_conversation_apikey"),
        description="IAM API key，存在时优先于用户名/密码",
    )
    workspace_id: Optional[str] = Field(
        default=None,
        description="显式指定的 workspace，配置后跳过查询与创建",
    )
    assistant_version: str = Field(default="2018-07-10", description="API 版本日期")
    iam_url: str = Field(
        default="https://iam.cloud.ibm.com/identity/token",
        description="IAM token 交换地址",
    )
    http_timeout: Optional[float] = Field(
        default=None,
        description="HTTP 超时时间（秒），为空表示不设超时",
    )
    training_file: Optional[str] = Field(
        default=None,
        description="创建 workspace 时使用的训练文件，默认使用内置示例",
    )

    # ---- 服务与日志 ----
    host: str = Field(default="0.0.0.0", description="HTTP 监听地址")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP 监听端口")
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO", description="日志级别")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("service_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v:
            return v.strip().rstrip("/")
        return v

    @field_validator("http_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("http_timeout must be positive")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = AssistantSettings()

# 类型别名，让外部代码可以使用 Settings 类型
Settings = AssistantSettings
