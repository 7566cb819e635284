"""Workspace 选择策略。

按固定顺序尝试 WORKSPACE_SOURCES，第一个返回非空 id 的来源胜出：

1. configured: 配置中显式指定的 workspace_id，原样信任，不检查远程是否存在。
2. first_existing: 远程列表中的第一个 workspace（按远程返回顺序）。
3. created: 用内置训练文件新建一个 workspace。

任何失败都不会被缓存，调用方下一次可以从第 1 步重新开始。
"""

from typing import Callable, Optional, Sequence, Tuple

from assistant_core.domain.exceptions import ProvisioningError, RemoteCallError
from assistant_core.infrastructure.logging.logger import logger
from assistant_core.workspace.training import TrainingDefinition, load_training_definition


TrainingLoader = Callable[[], TrainingDefinition]
WorkspaceSource = Callable[..., Optional[str]]


def _configured(client, config, loader: TrainingLoader) -> Optional[str]:
    return getattr(config, "workspace_id", None) or None


def _first_existing(client, config, loader: TrainingLoader) -> Optional[str]:
    try:
        workspaces = client.list_workspaces()
    except RemoteCallError as e:
        logger.error(
            "Error getting the workspaces",
            extra={"extra": {"code": e.code, "status": e.http_status}},
        )
        raise ProvisioningError(
            code="WORKSPACE_LIST_FAILED",
            message=e.message,
            http_status=e.http_status,
            body=e.extra.get("body"),
        ) from e
    if workspaces:
        return workspaces[0].workspace_id
    return None


def _created(client, config, loader: TrainingLoader) -> Optional[str]:
    logger.info("Creating a new workspace...")
    definition = loader()
    try:
        workspace = client.create_workspace(definition)
    except RemoteCallError as e:
        logger.error(
            "Error creating the workspace",
            extra={"extra": {"code": e.code, "status": e.http_status}},
        )
        raise ProvisioningError(
            code="WORKSPACE_CREATE_FAILED",
            message=e.message,
            http_status=e.http_status,
            body=e.extra.get("body"),
        ) from e
    logger.info(f"Workspace created. id: {workspace.workspace_id}")
    return workspace.workspace_id


WORKSPACE_SOURCES: Sequence[Tuple[str, WorkspaceSource]] = (
    ("configured", _configured),
    ("first_existing", _first_existing),
    ("created", _created),
)


def resolve_workspace_id(
    client,
    config,
    loader: Optional[TrainingLoader] = None,
) -> str:
    """返回可用的 workspace id。

    Args:
        client: AssistantClient（或实现了 list_workspaces/create_workspace 的对象）。
        config: 配置对象，读取 workspace_id 与 training_file。
        loader: 训练文件加载函数，默认读取配置或内置文件。

    Raises:
        ProvisioningError: 远程查询或创建失败。
        TrainingParseError: 训练文件无法解析。
    """

    if loader is None:
        training_file = getattr(config, "training_file", None)

        def loader() -> TrainingDefinition:
            return load_training_definition(training_file)

    for source_name, source in WORKSPACE_SOURCES:
        workspace_id = source(client, config, loader)
        if workspace_id:
            logger.info(
                "Workspace resolved",
                extra={"extra": {"source": source_name, "workspace_id": workspace_id}},
            )
            return workspace_id
    raise ProvisioningError(
        code="WORKSPACE_UNRESOLVED",
        message="No workspace could be resolved",
        http_status=500,
    )
