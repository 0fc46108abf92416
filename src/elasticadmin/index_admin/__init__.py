"""索引管理模块.

该模块提供单个索引的管理功能，包括：
- 索引创建、删除与存在性检查
- 索引设置与映射的读取和更新（兼容不同版本的响应格式）
- 别名读取与文本分析
- open / close / refresh / flush / optimize / clear_cache / snapshot
- stats / status / segments 诊断信息

示例用法:
    >>> from elasticadmin.index_admin import IndexAdmin
    >>> admin = IndexAdmin(transport, "users")
    >>> admin.create(settings={"number_of_shards": 1, "number_of_replicas": 0})
    >>> admin.update_mapping(
    ...     "doco", {"doco": {"properties": {"title": {"type": "string"}}}}
    ... )
    >>> admin.refresh().ok
    True
"""

from .exceptions import (
    IndexAdminError,
    IndexAlreadyExistsError,
    IndexNameError,
    IndexNotFoundError,
    InvalidSettingError,
)
from .models import (
    AnalyzedToken,
    IndexSettings,
    MappingProperty,
    MappingSet,
    TypeMapping,
)
from .tool import IndexAdmin

__all__ = [
    # 核心类
    "IndexAdmin",
    # 数据模型
    "AnalyzedToken",
    # 类型定义
    "IndexSettings",
    "MappingProperty",
    "TypeMapping",
    "MappingSet",
    # 异常类
    "IndexAdminError",
    "IndexNameError",
    "IndexNotFoundError",
    "IndexAlreadyExistsError",
    "InvalidSettingError",
]
