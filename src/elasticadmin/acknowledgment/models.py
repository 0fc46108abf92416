"""写操作结果数据模型定义模块."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OperationKind(Enum):
    """写操作类型枚举.

    Attributes:
        STRUCTURAL: 结构性操作（create、delete、open、close 等），以 acknowledged 判定
        DATA_PLANE: 数据面操作（refresh、flush 等），以 _shards.failed 判定
    """

    STRUCTURAL = "structural"
    DATA_PLANE = "data_plane"


# 操作名称到操作类型的映射
OPERATION_KINDS: dict[str, OperationKind] = {
    "create": OperationKind.STRUCTURAL,
    "delete": OperationKind.STRUCTURAL,
    "open": OperationKind.STRUCTURAL,
    "close": OperationKind.STRUCTURAL,
    "update_settings": OperationKind.STRUCTURAL,
    "update_mapping": OperationKind.STRUCTURAL,
    "delete_mapping": OperationKind.STRUCTURAL,
    "update_aliases": OperationKind.STRUCTURAL,
    "refresh": OperationKind.DATA_PLANE,
    "flush": OperationKind.DATA_PLANE,
    "optimize": OperationKind.DATA_PLANE,
    "clear_cache": OperationKind.DATA_PLANE,
    "snapshot": OperationKind.DATA_PLANE,
}


@dataclass
class AckResult:
    """结构性写操作结果.

    acknowledged 表示集群已接受变更，不代表变更已传播到所有节点。

    Attributes:
        acknowledged: 是否被确认
        raw: 服务端原始响应
    """

    acknowledged: bool
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.acknowledged


@dataclass
class ShardResult:
    """数据面写操作的分片结果.

    部分分片失败是正常的运维状况，以数据形式返回而不是抛出异常，
    由调用方决定能否容忍。

    Attributes:
        total: 分片总数
        successful: 成功的分片数
        failed: 失败的分片数
        failures: 失败详情列表
        raw: 服务端原始响应
    """

    total: int = 0
    successful: int = 0
    failed: int = 0
    failures: list[dict[str, Any]] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """所有分片均成功."""
        return self.failed == 0

    @property
    def partial_failure(self) -> bool:
        """存在失败的分片."""
        return self.failed > 0
