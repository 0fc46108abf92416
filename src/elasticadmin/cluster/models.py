"""集群管理数据模型定义模块."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HealthStatus(Enum):
    """集群健康状态枚举."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass
class ClusterHealth:
    """集群健康信息数据类.

    Attributes:
        cluster_name: 集群名称
        status: 健康状态（green、yellow、red）
        timed_out: 等待是否超时
        number_of_nodes: 节点数
        active_shards: 活跃分片数
        raw: 服务端原始响应
    """

    cluster_name: str = ""
    status: str = ""
    timed_out: bool = False
    number_of_nodes: int = 0
    active_shards: int = 0
    raw: dict[str, Any] = field(default_factory=dict)
