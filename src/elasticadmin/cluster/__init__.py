"""集群管理模块.

主要组件:
    - ClusterAdmin: 别名增删、集群健康检查、等待索引可用
    - ClusterHealth: 集群健康信息
    - HealthStatus: 健康状态枚举

使用示例:
    from elasticadmin.cluster import ClusterAdmin

    cluster = ClusterAdmin(transport)
    cluster.update_aliases(add={"index": "users-001", "alias": "users"})
"""

from .exceptions import ClusterAdminError, ClusterHealthTimeoutError
from .models import ClusterHealth, HealthStatus
from .tool import ClusterAdmin

__all__ = [
    "ClusterAdmin",
    "ClusterHealth",
    "HealthStatus",
    "ClusterAdminError",
    "ClusterHealthTimeoutError",
]
