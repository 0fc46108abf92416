"""集群管理异常定义模块."""

from ..exceptions import ElasticAdminError


class ClusterAdminError(ElasticAdminError):
    """集群管理基础异常类."""

    pass


class ClusterHealthTimeoutError(ClusterAdminError):
    """等待集群（或索引）达到指定健康状态超时.

    Attributes:
        health: 超时时服务端返回的健康信息
    """

    def __init__(self, message: str, health=None) -> None:
        super().__init__(message)
        self.health = health
