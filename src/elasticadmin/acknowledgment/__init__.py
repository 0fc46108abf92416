"""写操作确认策略模块.

主要组件:
    - AcknowledgmentPolicy: 根据操作类型判定写操作是否成功
    - AckResult: 结构性操作结果
    - ShardResult: 数据面操作的分片结果
    - OperationKind: 操作类型枚举
"""

from .models import OPERATION_KINDS, AckResult, OperationKind, ShardResult
from .tool import AcknowledgmentPolicy

__all__ = [
    "AcknowledgmentPolicy",
    "AckResult",
    "ShardResult",
    "OperationKind",
    "OPERATION_KINDS",
]
