"""集群管理工具模块.

IndexAdmin 之外的集群级协作者：别名增删、集群健康检查，以及写操作后
等待索引可用的有界等待。
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..acknowledgment import AckResult, AcknowledgmentPolicy
from ..exceptions import RequestFailedError
from ..index_admin import IndexAdmin
from ..normalizer import error_info, require
from ..transport import HttpMethod, Transport
from ..typing import Document
from .exceptions import ClusterHealthTimeoutError
from .models import ClusterHealth, HealthStatus

logger = logging.getLogger(__name__)

AliasSpec = Mapping[str, Any] | list[Mapping[str, Any]]


def _as_actions(action: str, spec: AliasSpec | None) -> list[Document]:
    if spec is None:
        return []
    items = [spec] if isinstance(spec, Mapping) else list(spec)
    actions = []
    for item in items:
        if not item.get("index") or not item.get("alias"):
            raise ValueError(f"{action} 别名操作必须同时提供 index 与 alias: {dict(item)}")
        actions.append({action: dict(item)})
    return actions


class ClusterAdmin:
    """集群级管理接口.

    Args:
        transport: 传输层实例
        policy: 写操作确认策略，默认使用 AcknowledgmentPolicy

    Example:
        >>> cluster = ClusterAdmin(transport)
        >>> cluster.update_aliases(add={"index": "users-001", "alias": "users"})
        >>> cluster.wait_for_index("users-001")
    """

    def __init__(
        self,
        transport: Transport,
        policy: AcknowledgmentPolicy | None = None,
    ):
        if transport is None:
            raise ValueError("transport 不能为 None")
        self.transport = transport
        self.policy = policy or AcknowledgmentPolicy()

    def index(self, name: str, **kwargs: Any) -> IndexAdmin:
        """创建共享同一传输层的 IndexAdmin."""
        return IndexAdmin(self.transport, name, **kwargs)

    def server_version(self) -> str:
        """获取服务端版本号."""
        status, body = self.transport.execute(HttpMethod.GET, "/")
        if not 200 <= status < 300:
            raise RequestFailedError(
                f"获取服务端版本失败: HTTP {status}", status_code=status, body=body
            )
        return str(require(body, "version.number"))

    def update_aliases(
        self,
        add: AliasSpec | None = None,
        remove: AliasSpec | None = None,
    ) -> AckResult:
        """原子地增删别名.

        Args:
            add: 要添加的别名，{"index": ..., "alias": ...} 或其列表
            remove: 要移除的别名，格式同 add

        Returns:
            AckResult

        Raises:
            ValueError: 没有任何别名操作时抛出
            RequestFailedError: 服务端返回错误时抛出
        """
        actions = _as_actions("remove", remove) + _as_actions("add", add)
        if not actions:
            raise ValueError("add 与 remove 不能同时为空")

        status, response = self.transport.execute(
            HttpMethod.POST, "/_aliases", {"actions": actions}
        )
        if not 200 <= status < 300:
            info = error_info(response)
            raise RequestFailedError(
                f"更新别名失败: HTTP {status} {info.reason}".rstrip(),
                status_code=status,
                body=response,
            )

        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"别名更新成功: {actions}")
        return result

    def health(
        self,
        index: str | None = None,
        wait_for_status: HealthStatus | str | None = None,
        timeout: str | None = None,
    ) -> ClusterHealth:
        """获取集群或单个索引的健康信息.

        等待超时时部分版本返回 408，部分版本返回 200 且 timed_out 为 true，
        两种情况都以 timed_out=True 的结果返回。
        """
        path = f"/_cluster/health/{index}" if index else "/_cluster/health"
        params: dict[str, str] = {}
        if wait_for_status is not None:
            params["wait_for_status"] = HealthStatus(wait_for_status).value
        if timeout is not None:
            params["timeout"] = timeout

        status, body = self.transport.execute(HttpMethod.GET, path, None, params or None)
        if status != 408 and not 200 <= status < 300:
            raise RequestFailedError(
                f"获取集群健康信息失败: HTTP {status}", status_code=status, body=body
            )

        body = body or {}
        return ClusterHealth(
            cluster_name=body.get("cluster_name", ""),
            status=body.get("status", ""),
            timed_out=status == 408 or body.get("timed_out") is True,
            number_of_nodes=body.get("number_of_nodes", 0),
            active_shards=body.get("active_shards", 0),
            raw=body,
        )

    def wait_for_index(
        self,
        name: str,
        status: HealthStatus | str = HealthStatus.YELLOW,
        timeout: str = "30s",
    ) -> ClusterHealth:
        """等待索引达到指定健康状态.

        等待由服务端完成，客户端只发一次请求。

        Raises:
            ClusterHealthTimeoutError: 在 timeout 内未达到指定状态时抛出
        """
        health = self.health(index=name, wait_for_status=status, timeout=timeout)
        if health.timed_out:
            raise ClusterHealthTimeoutError(
                f"索引 '{name}' 在 {timeout} 内未达到 {HealthStatus(status).value} 状态",
                health=health,
            )
        return health
