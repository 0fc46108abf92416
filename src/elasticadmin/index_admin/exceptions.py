"""索引管理异常定义模块."""

from ..exceptions import ElasticAdminError, RequestFailedError


class IndexAdminError(ElasticAdminError):
    """索引管理基础异常类."""

    pass


class IndexNameError(IndexAdminError, ValueError):
    """索引名称缺失或不符合 Elasticsearch 规范."""

    pass


class IndexNotFoundError(IndexAdminError):
    """索引不存在异常."""

    pass


class IndexAlreadyExistsError(IndexAdminError):
    """索引已存在异常."""

    pass


class InvalidSettingError(RequestFailedError):
    """索引设置更新被服务端拒绝，例如修改了非动态设置."""

    pass
