"""传输层模块 - IndexAdmin 与 Elasticsearch 之间的 HTTP 通道.

主要组件:
    - Transport: 传输接口，execute(method, path, body, params) -> (status, body)
    - ElasticsearchTransport: 基于官方 elasticsearch 客户端的实现
    - TransportConfig: 连接与认证配置模型
    - HttpMethod: HTTP 方法枚举

使用示例:
    from elasticadmin.transport import ElasticsearchTransport, TransportConfig

    transport = ElasticsearchTransport.from_config(
        TransportConfig(hosts=["http://localhost:9200"])
    )
"""

from .exceptions import (
    NetworkError,
    TransportConfigError,
    TransportError,
    TransportTimeoutError,
)
from .models import HttpMethod, TransportConfig
from .tool import ElasticsearchTransport, Transport

__all__ = [
    # 传输实现
    "Transport",
    "ElasticsearchTransport",
    # 模型
    "HttpMethod",
    "TransportConfig",
    # 异常
    "TransportError",
    "NetworkError",
    "TransportTimeoutError",
    "TransportConfigError",
]
