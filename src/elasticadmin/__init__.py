"""elasticadmin - Elasticsearch 单索引管理客户端.

在不同服务端版本返回不同响应结构的情况下，为索引的创建、删除、设置、映射、
别名、分析以及 open/close/refresh 等运维操作提供统一的调用接口。

主要功能:
    - IndexAdmin: 单个索引的管理接口
    - normalizer: 扁平/嵌套等多种响应格式的规范化
    - AcknowledgmentPolicy: 写操作确认策略
    - ElasticsearchTransport: 基于官方 elasticsearch 客户端的传输实现
    - ClusterAdmin: 别名增删与等待索引可用

使用示例:
    from elasticadmin import ElasticsearchTransport, IndexAdmin, TransportConfig

    transport = ElasticsearchTransport.from_config(
        TransportConfig(hosts=["http://localhost:9200"])
    )
    admin = IndexAdmin(transport, "users")
    if not admin.exists():
        admin.create(settings={"number_of_shards": 1, "number_of_replicas": 0})
"""

__version__ = "0.1.0"

# 导出写操作确认策略
from elasticadmin.acknowledgment import (
    AckResult,
    AcknowledgmentPolicy,
    OperationKind,
    ShardResult,
)

# 导出集群协作者
from elasticadmin.cluster import ClusterAdmin, ClusterHealth, ClusterHealthTimeoutError

# 导出异常
from elasticadmin.exceptions import (
    ElasticAdminError,
    MalformedResponseError,
    RequestFailedError,
    UnsupportedOperationError,
)

# 导出索引管理
from elasticadmin.index_admin import (
    IndexAdmin,
    IndexAlreadyExistsError,
    IndexNameError,
    IndexNotFoundError,
    InvalidSettingError,
)

# 导出传输层
from elasticadmin.transport import (
    ElasticsearchTransport,
    HttpMethod,
    NetworkError,
    Transport,
    TransportConfig,
    TransportTimeoutError,
)

__all__ = [
    # 版本
    "__version__",
    # 核心类
    "IndexAdmin",
    "AcknowledgmentPolicy",
    "ClusterAdmin",
    # 传输层
    "Transport",
    "ElasticsearchTransport",
    "TransportConfig",
    "HttpMethod",
    # 结果模型
    "AckResult",
    "ShardResult",
    "OperationKind",
    "ClusterHealth",
    # 异常
    "ElasticAdminError",
    "RequestFailedError",
    "MalformedResponseError",
    "UnsupportedOperationError",
    "IndexNameError",
    "IndexNotFoundError",
    "IndexAlreadyExistsError",
    "InvalidSettingError",
    "NetworkError",
    "TransportTimeoutError",
    "ClusterHealthTimeoutError",
]
