"""索引管理数据模型定义模块."""

from dataclasses import dataclass
from typing import Any, TypedDict


class IndexSettings(TypedDict, total=False):
    """索引设置类型定义.

    创建索引时可以直接写顶层键，也可以写成 {"index": {...}}，
    更新设置时还可以使用点号键 {"index.number_of_replicas": 1}。

    Attributes:
        number_of_shards: 主分片数量
        number_of_replicas: 副本分片数量
        refresh_interval: 刷新间隔
        analysis: 分析器配置
        index: 嵌套格式的 index 设置
    """

    number_of_shards: int
    number_of_replicas: int
    refresh_interval: str
    analysis: dict[str, Any]
    index: dict[str, Any]


class MappingProperty(TypedDict, total=False):
    """映射属性类型定义.

    Attributes:
        type: 字段类型（string, keyword, text, integer, date 等）
        index: 索引方式（例如 not_analyzed）
        analyzer: 分析器
        fields: 多字段定义
    """

    type: str
    index: str | bool
    analyzer: str
    fields: dict[str, Any]


class TypeMapping(TypedDict, total=False):
    """单个文档类型的映射.

    Attributes:
        _source: _source 字段配置
        _all: _all 字段配置
        properties: 字段属性映射
        dynamic: 动态映射策略
    """

    _source: dict[str, Any]
    _all: dict[str, Any]
    properties: dict[str, MappingProperty]
    dynamic: str | bool


# 文档类型名称到类型映射
MappingSet = dict[str, TypeMapping]


@dataclass(frozen=True)
class AnalyzedToken:
    """分析接口产出的单个词元.

    Attributes:
        token: 词元文本
        start_offset: 在原文中的起始偏移
        end_offset: 在原文中的结束偏移
        type: 词元类型（例如 <ALPHANUM>、word）
        position: 词元位置
    """

    token: str
    start_offset: int = 0
    end_offset: int = 0
    type: str = ""
    position: int = 0
