"""响应规范化模块.

把不同服务端版本返回的不同结构统一为一种嵌套格式：
- get / require: 同时兼容扁平点号键与嵌套对象的查找
- expand_settings / normalize_settings: 索引设置规范化
- normalize_mappings: 映射规范化（0.90 / 1.x / 7.x 无类型）
- normalize_aliases: 别名规范化
- get_indices: 统计响应中 indices 与 _all.indices 的兼容访问
- error_info: 字符串与对象两种错误响应的解析

示例用法:
    >>> from elasticadmin.normalizer import get
    >>> get({"index": {"number_of_shards": "3"}}, "index.number_of_shards")
    '3'
"""

from .models import ErrorInfo, SettingsShape
from .tool import (
    TYPELESS_MAPPING_NAME,
    detect_settings_shape,
    error_info,
    expand_settings,
    get,
    get_indices,
    is_already_exists,
    is_index_missing,
    is_type_missing,
    normalize_aliases,
    normalize_mappings,
    normalize_settings,
    require,
)

__all__ = [
    # 查找
    "get",
    "require",
    # 索引设置
    "SettingsShape",
    "detect_settings_shape",
    "expand_settings",
    "normalize_settings",
    # 映射与别名
    "TYPELESS_MAPPING_NAME",
    "normalize_mappings",
    "normalize_aliases",
    # 统计
    "get_indices",
    # 错误
    "ErrorInfo",
    "error_info",
    "is_index_missing",
    "is_already_exists",
    "is_type_missing",
]
