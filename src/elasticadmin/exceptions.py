"""elasticadmin 异常定义模块.

所有库内异常均继承自 ElasticAdminError，调用方可以统一捕获。
"""

from typing import Any


class ElasticAdminError(Exception):
    """elasticadmin 基础异常类."""

    pass


class RequestFailedError(ElasticAdminError):
    """请求失败异常.

    服务端返回非 2xx 状态码时抛出。网络与超时异常也继承自该类，
    此时 status_code 为 None。

    Attributes:
        status_code: HTTP 状态码
        body: 服务端返回的响应体
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ElasticAdminError):
    """响应格式异常.

    在所有已知的响应格式中都找不到期望字段时抛出。
    """

    pass


class UnsupportedOperationError(ElasticAdminError):
    """目标服务端版本不支持该操作."""

    pass
