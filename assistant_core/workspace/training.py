"""训练文件加载工具。

创建 workspace 时从内置的 data/bank_simple_workspace.json 读取定义。
解析是宽松的：未知字段直接忽略，缺失字段保持为 None，
并且在发给远程服务时整体省略，不做任何默认值填充。
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from assistant_core.domain.exceptions import TrainingParseError


DATA_DIR = Path(__file__).resolve().parent / "data"
TRAINING_FILE = DATA_DIR / "bank_simple_workspace.json"


class TrainingDefinition(BaseModel):
    """创建 workspace 所需的定义。

    intents/entities/dialog_nodes/counterexamples 对本服务是不透明的，
    只做透传。
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    intents: Optional[List[Dict[str, Any]]] = None
    entities: Optional[List[Dict[str, Any]]] = None
    dialog_nodes: Optional[List[Dict[str, Any]]] = None
    counterexamples: Optional[List[Dict[str, Any]]] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        """转成 create workspace 请求体，缺失字段不出现。"""

        return self.model_dump(exclude_none=True)


def load_training_definition(path: Union[str, Path, None] = None) -> TrainingDefinition:
    """读取并解析训练文件。

    Args:
        path: 训练文件路径，默认使用内置示例。

    Raises:
        TrainingParseError: 文件不存在、JSON 格式错误或字段类型不符。
    """

    source = Path(path) if path else TRAINING_FILE
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("training document must be a JSON object")
        return TrainingDefinition.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        raise TrainingParseError(
            code="TRAINING_PARSE_ERROR",
            message=f"Error parsing the training file {source}: {e}",
            http_status=500,
        ) from e
