"""响应规范化工具模块.

同一语义的响应在不同服务端版本下结构不同，本模块把它们统一成一种
嵌套格式，并提供不关心原始格式的查找函数。所有函数都是纯函数，
不会修改传入的响应。

查找优先级固定为：先按完整的点号键查找（扁平格式），再逐段遍历嵌套对象。
"""

import copy
import logging
import re
from collections.abc import Mapping
from typing import Any

from ..exceptions import MalformedResponseError
from ..typing import Document
from .models import ErrorInfo, SettingsShape

logger = logging.getLogger(__name__)

# 无类型映射（7.x 之后）中可能出现的根级键
_MAPPING_ROOT_KEYS = frozenset(
    {
        "properties",
        "dynamic",
        "dynamic_templates",
        "date_detection",
        "numeric_detection",
        "runtime",
        "_source",
        "_all",
        "_meta",
        "_routing",
        "_field_names",
        "_size",
        "_parent",
        "_timestamp",
        "_ttl",
    }
)

TYPELESS_MAPPING_NAME = "_doc"

INDEX_MISSING_MARKERS = ("index_not_found_exception", "IndexMissingException")
ALREADY_EXISTS_MARKERS = (
    "resource_already_exists_exception",
    "index_already_exists_exception",
    "IndexAlreadyExistsException",
)
TYPE_MISSING_MARKERS = ("type_missing_exception", "TypeMissingException")

_ERROR_TYPE_PATTERN = re.compile(r"^\s*([A-Za-z_][\w.]*)")

_MISSING = object()


# ========== 查找 ==========


def _lookup_flat(document: Any, path: str) -> Any:
    if isinstance(document, Mapping) and path in document:
        return document[path]
    return _MISSING


def _lookup_nested(document: Any, path: str) -> Any:
    current = document
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return _MISSING
        current = current[segment]
    return current


def get(document: Any, path: str, default: Any = None) -> Any:
    """按点号路径查找值，同时兼容扁平与嵌套两种格式.

    Args:
        document: 响应文档
        path: 点号路径，例如 "index.number_of_shards"
        default: 两种格式都找不到时的返回值

    Returns:
        找到的第一个非 None 值，否则返回 default

    Example:
        >>> get({"index.number_of_shards": "3"}, "index.number_of_shards")
        '3'
        >>> get({"index": {"number_of_shards": "3"}}, "index.number_of_shards")
        '3'
    """
    for lookup in (_lookup_flat, _lookup_nested):
        value = lookup(document, path)
        if value is not _MISSING and value is not None:
            return value
    return default


def require(document: Any, path: str) -> Any:
    """按点号路径查找值，找不到时抛出 MalformedResponseError.

    Args:
        document: 响应文档
        path: 点号路径

    Returns:
        找到的值

    Raises:
        MalformedResponseError: 文档不是对象，或两种格式都找不到该字段时抛出
    """
    if not isinstance(document, Mapping):
        raise MalformedResponseError(
            f"响应不是 JSON 对象，无法查找 '{path}': {document!r}"
        )
    value = get(document, path, _MISSING)
    if value is _MISSING:
        raise MalformedResponseError(f"响应中缺少字段 '{path}'")
    return value


# ========== 索引设置 ==========


def detect_settings_shape(settings: Mapping[str, Any]) -> SettingsShape:
    """检测索引设置的格式."""
    if not settings:
        return SettingsShape.EMPTY

    has_flat = any("." in key for key in settings)
    has_nested = any(isinstance(value, Mapping) for value in settings.values())
    if has_flat and has_nested:
        return SettingsShape.MIXED
    if has_flat:
        return SettingsShape.FLAT
    return SettingsShape.NESTED


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _assign(target: dict[str, Any], segments: list[str], value: Any) -> None:
    current = target
    for segment in segments[:-1]:
        if not isinstance(current.get(segment), dict):
            current[segment] = {}
        current = current[segment]

    leaf = segments[-1]
    if isinstance(value, dict) and isinstance(current.get(leaf), dict):
        _deep_merge(current[leaf], value)
    else:
        current[leaf] = value


def expand_settings(settings: Mapping[str, Any]) -> dict[str, Any]:
    """把扁平的点号键展开为嵌套对象.

    嵌套键先写入，扁平键后写入；两者冲突时扁平键的值生效，
    与 get 的查找优先级保持一致。

    Args:
        settings: 任意格式的索引设置

    Returns:
        嵌套格式的索引设置（深拷贝，不与入参共享对象）

    Example:
        >>> expand_settings({"index.number_of_shards": "3"})
        {'index': {'number_of_shards': '3'}}
    """
    result: dict[str, Any] = {}
    flat_items: list[tuple[list[str], Any]] = []

    for key, value in settings.items():
        if isinstance(value, Mapping):
            value = expand_settings(value)
        else:
            value = copy.deepcopy(value)

        if "." in key:
            flat_items.append((key.split("."), value))
        else:
            result[key] = value

    for segments, value in flat_items:
        _assign(result, segments, value)

    return result


def normalize_settings(response: Any) -> dict[str, Document]:
    """规范化 GET /{index}/_settings 的响应.

    Args:
        response: 服务端响应，格式为 {索引名: {"settings": {...}}}

    Returns:
        {索引名: {"settings": 嵌套格式设置}}，带 include_defaults 时
        "defaults" 同样被展开

    Raises:
        MalformedResponseError: 响应不是对象，或某个索引缺少 settings 时抛出
    """
    if not isinstance(response, Mapping):
        raise MalformedResponseError(f"索引设置响应不是 JSON 对象: {response!r}")

    result: dict[str, Document] = {}
    for index_name, entry in response.items():
        if not isinstance(entry, Mapping) or not isinstance(
            entry.get("settings"), Mapping
        ):
            raise MalformedResponseError(f"索引 '{index_name}' 的设置响应缺少 settings")

        shape = detect_settings_shape(entry["settings"])
        logger.debug(f"索引 '{index_name}' 的设置格式: {shape.value}")

        normalized = dict(entry)
        for section in ("settings", "defaults"):
            if isinstance(entry.get(section), Mapping):
                normalized[section] = expand_settings(entry[section])
        result[index_name] = normalized

    return result


# ========== 映射 ==========


def _is_typeless_mapping(mappings: Mapping[str, Any]) -> bool:
    return any(key in _MAPPING_ROOT_KEYS for key in mappings)


def _normalize_mapping_set(
    mappings: Mapping[str, Any], type_name: str | None
) -> dict[str, Any]:
    if not mappings:
        return {}
    if _is_typeless_mapping(mappings):
        return {type_name or TYPELESS_MAPPING_NAME: copy.deepcopy(dict(mappings))}
    return copy.deepcopy(dict(mappings))


def normalize_mappings(
    response: Any,
    index_name: str | None = None,
    type_name: str | None = None,
) -> dict[str, dict[str, Any]]:
    """规范化 GET /{index}/_mapping 的响应.

    支持的格式:
        - 0.90: {索引名: {类型名: {...}}}
        - 1.x 及之后: {索引名: {"mappings": {类型名: {...}}}}
        - 7.x 无类型: {索引名: {"mappings": {"properties": {...}}}}
        - 0.90 按类型过滤且省略索引名: {类型名: {...}}
        - 映射被删空后的 {}

    Args:
        response: 服务端响应
        index_name: 请求的索引名，用于识别省略索引名的响应
        type_name: 请求的类型名

    Returns:
        {索引名: {类型名: 类型映射}}

    Raises:
        MalformedResponseError: 响应不是对象时抛出
    """
    if not isinstance(response, Mapping):
        raise MalformedResponseError(f"映射响应不是 JSON 对象: {response!r}")

    if index_name is not None and index_name not in response:
        if not response:
            return {index_name: {}}
        if type_name is not None and type_name in response:
            return {index_name: {type_name: copy.deepcopy(response[type_name])}}

    result: dict[str, dict[str, Any]] = {}
    for name, entry in response.items():
        if not isinstance(entry, Mapping):
            raise MalformedResponseError(f"索引 '{name}' 的映射不是 JSON 对象")
        if "mappings" in entry and isinstance(entry["mappings"], Mapping):
            result[name] = _normalize_mapping_set(entry["mappings"], type_name)
        else:
            result[name] = _normalize_mapping_set(entry, type_name)
    return result


# ========== 别名 ==========


def normalize_aliases(response: Any) -> dict[str, Document]:
    """规范化别名响应，保证每个索引都带有 "aliases" 对象.

    Raises:
        MalformedResponseError: 响应或某个索引条目不是对象时抛出
    """
    if not isinstance(response, Mapping):
        raise MalformedResponseError(f"别名响应不是 JSON 对象: {response!r}")

    result: dict[str, Document] = {}
    for name, entry in response.items():
        if not isinstance(entry, Mapping):
            raise MalformedResponseError(f"索引 '{name}' 的别名不是 JSON 对象")
        result[name] = {"aliases": copy.deepcopy(dict(entry.get("aliases") or {}))}
    return result


# ========== 统计 ==========


def get_indices(response: Any) -> Document:
    """取出统计类响应中按索引分组的部分.

    新版本放在顶层 "indices"，旧版本放在 "_all.indices"，先查新格式。

    Raises:
        MalformedResponseError: 两种格式都不存在时抛出
    """
    if isinstance(response, Mapping):
        indices = response.get("indices")
        if isinstance(indices, Mapping):
            return indices
    indices = require(response, "_all.indices")
    if not isinstance(indices, Mapping):
        raise MalformedResponseError("响应中的 '_all.indices' 不是 JSON 对象")
    return indices


# ========== 错误 ==========


def error_info(body: Any) -> ErrorInfo:
    """解析错误响应体.

    Args:
        body: 服务端返回的错误响应体

    Returns:
        ErrorInfo，无法识别时 type 与 reason 均为空字符串
    """
    if not isinstance(body, Mapping):
        return ErrorInfo()

    error = body.get("error")
    if isinstance(error, Mapping):
        reason = str(error.get("reason") or "")
        # root_cause 中的类型有时比外层更具体
        root_causes = error.get("root_cause") or []
        extra = " ".join(
            str(cause.get("type", ""))
            for cause in root_causes
            if isinstance(cause, Mapping)
        )
        if extra:
            reason = f"{reason} {extra}".strip()
        return ErrorInfo(type=str(error.get("type") or ""), reason=reason)

    if isinstance(error, str):
        match = _ERROR_TYPE_PATTERN.match(error)
        return ErrorInfo(type=match.group(1) if match else "", reason=error)

    return ErrorInfo()


def is_index_missing(body: Any) -> bool:
    """判断错误响应是否表示索引不存在."""
    return error_info(body).matches(*INDEX_MISSING_MARKERS)


def is_already_exists(body: Any) -> bool:
    """判断错误响应是否表示索引已存在."""
    return error_info(body).matches(*ALREADY_EXISTS_MARKERS)


def is_type_missing(body: Any) -> bool:
    """判断错误响应是否表示映射类型不存在."""
    return error_info(body).matches(*TYPE_MISSING_MARKERS)
