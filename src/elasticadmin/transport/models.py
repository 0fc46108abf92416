"""传输层数据模型定义模块.

提供传输层相关的数据模型，包括：
- HttpMethod: HTTP 方法枚举
- TransportConfig: 连接与认证配置
"""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import TransportConfigError


class HttpMethod(Enum):
    """HTTP 方法枚举.

    索引管理接口只会用到以下五种方法。
    """

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"


@dataclass
class TransportConfig:
    """传输配置模型.

    定义 Elasticsearch 集群的连接信息、认证方式和请求策略。

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        max_retries: 传输层最大重试次数，默认 3，必须 >= 0
        retry_on_timeout: 超时是否由传输层重试，默认 False
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        TransportConfigError: 当参数不合法时抛出

    Examples:
        >>> config = TransportConfig(
        ...     hosts=["http://localhost:9200"],
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True
    request_timeout: float = 30
    max_retries: int = 3
    retry_on_timeout: bool = False
    http_compress: bool = True

    def __post_init__(self) -> None:
        """校验传输配置参数合法性."""
        if not self.hosts:
            raise TransportConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if self.request_timeout < 0:
            raise TransportConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
        if self.max_retries < 0:
            raise TransportConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if (self.username is None) != (self.password is None):
            raise TransportConfigError("username 与 password 必须同时提供")
