"""传输层工具模块.

定义 IndexAdmin 依赖的传输接口 Transport，以及基于官方 elasticsearch
客户端的实现 ElasticsearchTransport。

使用示例:
    from elasticadmin.transport import ElasticsearchTransport, TransportConfig

    config = TransportConfig(hosts=["http://localhost:9200"])
    with ElasticsearchTransport.from_config(config) as transport:
        status, body = transport.execute("GET", "/_cluster/health")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from elasticsearch import ApiError, ConnectionError, ConnectionTimeout, Elasticsearch

from ..typing import Document, Params
from .exceptions import NetworkError, TransportTimeoutError
from .models import HttpMethod, TransportConfig

logger = logging.getLogger(__name__)

_JSON_HEADERS = {
    "accept": "application/json",
    "content-type": "application/json",
}


class Transport(ABC):
    """传输接口.

    任何实现了 execute 的对象都可以作为 IndexAdmin 的传输层。
    非 2xx 状态码作为返回值交给调用方处理，不抛出异常；
    只有网络失败（NetworkError）和超时（TransportTimeoutError）才抛出。
    """

    @abstractmethod
    def execute(
        self,
        method: HttpMethod | str,
        path: str,
        body: Document | None = None,
        params: Params | None = None,
    ) -> tuple[int, Document | None]:
        """执行一次 HTTP 请求.

        Args:
            method: HTTP 方法
            path: 请求路径，例如 "/my-index/_settings"
            body: 请求体，None 表示无请求体
            params: 查询参数

        Returns:
            元组：(状态码, 响应体)

        Raises:
            NetworkError: 连接失败时抛出
            TransportTimeoutError: 请求超时时抛出
        """
        pass


class ElasticsearchTransport(Transport):
    """基于官方 elasticsearch 客户端的传输实现.

    通过 Elasticsearch.perform_request 发送请求，把客户端抛出的
    ApiError 还原为 (状态码, 响应体)，把连接异常转换为本库的异常类型。

    Args:
        es_client: Elasticsearch 客户端实例
    """

    def __init__(self, es_client: Elasticsearch):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client

    @classmethod
    def from_config(cls, config: TransportConfig) -> ElasticsearchTransport:
        """根据传输配置创建实例.

        根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
        和 SSL 配置构建客户端。

        Args:
            config: 传输配置

        Returns:
            ElasticsearchTransport 实例
        """
        kwargs: dict[str, Any] = {
            "hosts": config.hosts,
            "request_timeout": config.request_timeout,
            "max_retries": config.max_retries,
            "retry_on_timeout": config.retry_on_timeout,
            "http_compress": config.http_compress,
            "verify_certs": config.verify_certs,
        }

        # Basic Auth 认证
        if config.username and config.password:
            kwargs["basic_auth"] = (config.username, config.password)

        # API Key 认证
        if config.api_key:
            kwargs["api_key"] = config.api_key

        # Bearer Token 认证
        if config.bearer_token:
            kwargs["bearer_auth"] = config.bearer_token

        if config.ca_certs:
            kwargs["ca_certs"] = config.ca_certs

        return cls(Elasticsearch(**kwargs))

    def execute(
        self,
        method: HttpMethod | str,
        path: str,
        body: Document | None = None,
        params: Params | None = None,
    ) -> tuple[int, Document | None]:
        method_name = HttpMethod(method).value
        headers = dict(_JSON_HEADERS) if body is not None else {"accept": "application/json"}

        logger.debug(f"{method_name} {path} params={params}")
        try:
            response = self.es_client.perform_request(
                method_name,
                path,
                params=params or None,
                headers=headers,
                body=body,
            )
        except ApiError as e:
            # 非 2xx 响应交给调用方按操作语义处理
            logger.debug(f"{method_name} {path} -> {e.status_code}")
            return e.status_code, e.body if isinstance(e.body, dict) else None
        except ConnectionTimeout as e:
            raise TransportTimeoutError(f"请求 {method_name} {path} 超时: {str(e)}") from e
        except ConnectionError as e:
            raise NetworkError(f"请求 {method_name} {path} 连接失败: {str(e)}") from e

        status = response.meta.status
        logger.debug(f"{method_name} {path} -> {status}")
        if method_name == HttpMethod.HEAD.value:
            return status, None
        response_body = response.body
        return status, response_body if isinstance(response_body, dict) else None

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ElasticsearchTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭客户端."""
        self.close()

    def close(self) -> None:
        """关闭底层客户端连接."""
        self.es_client.close()
