"""传输层异常定义模块."""

from ..exceptions import ElasticAdminError, RequestFailedError


class TransportError(RequestFailedError):
    """传输层基础异常类.

    网络与超时异常没有 HTTP 状态码，status_code 恒为 None。
    """

    pass


class NetworkError(TransportError):
    """网络连接异常.

    无法建立或保持与服务端的连接时抛出。
    """

    pass


class TransportTimeoutError(TransportError):
    """请求超时异常.

    请求超过传输层设定的超时时间时抛出。
    """

    pass


class TransportConfigError(ElasticAdminError):
    """传输配置校验异常.

    当配置参数不合法时抛出，例如 hosts 为空、request_timeout 小于 0 等。
    """

    pass
