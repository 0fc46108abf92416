"""索引管理核心工具类."""

import logging
from collections.abc import Mapping
from typing import Any

from ..acknowledgment import AckResult, AcknowledgmentPolicy, ShardResult
from ..exceptions import (
    MalformedResponseError,
    RequestFailedError,
    UnsupportedOperationError,
)
from ..normalizer import (
    error_info,
    get,
    get_indices,
    is_already_exists,
    is_index_missing,
    normalize_aliases,
    normalize_mappings,
    normalize_settings,
    require,
)
from ..transport import HttpMethod, Transport
from ..typing import Document, Params
from .exceptions import (
    IndexAlreadyExistsError,
    IndexNameError,
    IndexNotFoundError,
    InvalidSettingError,
)
from .models import AnalyzedToken, IndexSettings, MappingSet, TypeMapping

logger = logging.getLogger(__name__)

# 服务端拒绝未知接口时可能返回的状态码
_UNSUPPORTED_ENDPOINT_STATUSES = (400, 404, 405)


def _validate_index_name(index_name: str) -> bool:
    """验证索引名称是否符合 Elasticsearch 规范.

    Args:
        index_name: 索引名称

    Returns:
        是否有效

    Note:
        Elasticsearch 索引名称限制：
        - 不能以 _ - + 开头
        - 不能包含 , # / \\ * ? " < > | 空白字符
        - 不能是 . 或 ..
        - 长度不能超过 255 字节
    """
    if not index_name or not isinstance(index_name, str):
        return False

    if len(index_name.encode("utf-8")) > 255:
        return False

    if index_name.startswith(("_", "-", "+")):
        return False

    if index_name in (".", ".."):
        return False

    invalid_chars = {",", "#", "/", "\\", "*", "?", '"', "<", ">", "|", " ", "\t", "\n", "\r"}
    if any(char in invalid_chars for char in index_name):
        return False

    return True


def _params(**kwargs: Any) -> Params:
    """构建查询参数，忽略 None，布尔值转为小写字符串."""
    params: Params = {}
    for key, value in kwargs.items():
        if value is None:
            continue
        params[key] = str(value).lower() if isinstance(value, bool) else str(value)
    return params


class IndexAdmin:
    """单个索引的管理接口.

    负责把创建、设置、映射、别名、分析以及 open/close/refresh 等操作翻译为
    HTTP 请求，并把不同服务端版本的响应规范化为统一格式。

    实例不缓存任何状态，每次访问都会向服务端发起一次新请求。写操作返回
    acknowledged 后，紧接着的读操作仍可能读到尚未传播的旧状态，需要强一致
    时请使用 ClusterAdmin.wait_for_index 等待。

    Args:
        transport: 传输层实例
        name: 索引名称，构造后不可修改
        server_version: 服务端版本（可选），用于在请求前判断 snapshot 是否可用
        policy: 写操作确认策略，默认使用 AcknowledgmentPolicy

    Raises:
        IndexNameError: 索引名称为空或不符合规范时抛出，不会发起任何请求

    Example:
        >>> admin = IndexAdmin(transport, "users")
        >>> admin.create(settings={"number_of_shards": 3, "number_of_replicas": 0})
        >>> admin.setting("index.number_of_shards")
        '3'
    """

    def __init__(
        self,
        transport: Transport,
        name: str,
        *,
        server_version: str | tuple[int, ...] | None = None,
        policy: AcknowledgmentPolicy | None = None,
    ):
        if not name:
            raise IndexNameError("索引名称不能为空")
        if not _validate_index_name(name):
            raise IndexNameError(f"索引名称 '{name}' 不符合 Elasticsearch 规范")
        if transport is None:
            raise ValueError("transport 不能为 None")

        self.transport = transport
        self._name = name
        self.server_version = server_version
        self.policy = policy or AcknowledgmentPolicy()

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"IndexAdmin(name={self._name!r})"

    # ==================== 请求辅助方法 ====================

    def _path(self, *parts: str) -> str:
        return "/" + "/".join((self._name,) + parts)

    def _execute(
        self,
        method: HttpMethod,
        path: str,
        body: Document | None = None,
        params: Params | None = None,
    ) -> tuple[int, Document | None]:
        logger.debug(f"索引 '{self._name}': {method.value} {path}")
        return self.transport.execute(method, path, body, params)

    def _raise_for_status(self, status: int, body: Any, operation: str) -> None:
        if 200 <= status < 300:
            return
        if status == 404 and is_index_missing(body):
            raise IndexNotFoundError(f"索引 '{self._name}' 不存在")
        info = error_info(body)
        raise RequestFailedError(
            f"{operation} 索引 '{self._name}' 失败: HTTP {status} {info.reason}".rstrip(),
            status_code=status,
            body=body,
        )

    def _request(
        self,
        method: HttpMethod,
        path: str,
        operation: str,
        body: Document | None = None,
        params: Params | None = None,
    ) -> Document:
        status, response = self._execute(method, path, body, params)
        self._raise_for_status(status, response, operation)
        return response if response is not None else {}

    def _shard_operation(
        self,
        path: str,
        operation: str,
        params: Params | None = None,
    ) -> ShardResult:
        response = self._request(HttpMethod.POST, path, operation, params=params)
        result = self.policy.shards(response)
        if result.ok:
            logger.info(f"索引 '{self._name}' {operation} 成功")
        else:
            logger.warning(
                f"索引 '{self._name}' {operation} 部分失败: "
                f"{result.failed}/{result.total} 个分片失败"
            )
        return result

    # ==================== 生命周期 ====================

    def exists(self) -> bool:
        """检查索引是否存在.

        Returns:
            2xx 返回 True，404 返回 False

        Raises:
            RequestFailedError: 其他状态码
        """
        status, body = self._execute(HttpMethod.HEAD, self._path())
        if 200 <= status < 300:
            return True
        if status == 404:
            return False
        raise RequestFailedError(
            f"检查索引 '{self._name}' 是否存在失败: HTTP {status}",
            status_code=status,
            body=body,
        )

    def create(
        self,
        settings: IndexSettings | None = None,
        mappings: MappingSet | None = None,
        aliases: dict[str, Any] | None = None,
    ) -> AckResult:
        """创建索引.

        三个参数都为空时不发送请求体，由服务端使用默认配置。

        Args:
            settings: 索引设置，例如 {"number_of_shards": 3}
            mappings: 按文档类型组织的映射
            aliases: 创建时附带的别名

        Returns:
            AckResult

        Raises:
            IndexAlreadyExistsError: 索引已存在时抛出
            RequestFailedError: 服务端返回其他错误时抛出

        Example:
            >>> admin.create(
            ...     settings={"number_of_shards": 1, "number_of_replicas": 0},
            ...     mappings={"doco": {"properties": {"title": {"type": "string"}}}},
            ... )
        """
        body: Document = {}
        if settings:
            body["settings"] = settings
        if mappings:
            body["mappings"] = mappings
        if aliases:
            body["aliases"] = aliases

        status, response = self._execute(HttpMethod.PUT, self._path(), body or None)
        if status in (400, 409) and is_already_exists(response):
            raise IndexAlreadyExistsError(f"索引 '{self._name}' 已存在")
        self._raise_for_status(status, response, "创建")

        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 创建成功")
        return result

    def delete(self) -> AckResult:
        """删除索引.

        Raises:
            IndexNotFoundError: 索引不存在时抛出
        """
        status, response = self._execute(HttpMethod.DELETE, self._path())
        if status == 404:
            raise IndexNotFoundError(f"索引 '{self._name}' 不存在，无法删除")
        self._raise_for_status(status, response, "删除")

        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 删除成功")
        return result

    def open(self) -> AckResult:
        """打开已关闭的索引."""
        response = self._request(HttpMethod.POST, self._path("_open"), "打开")
        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 已打开")
        return result

    def close(self) -> AckResult:
        """关闭索引.

        关闭的索引不接受读写操作，但保留元数据。
        """
        response = self._request(HttpMethod.POST, self._path("_close"), "关闭")
        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 已关闭")
        return result

    # ==================== 设置 ====================

    def settings(self) -> dict[str, Document]:
        """获取索引设置.

        Returns:
            {索引名: {"settings": 嵌套格式设置}}，与服务端返回扁平还是嵌套格式无关
        """
        response = self._request(HttpMethod.GET, self._path("_settings"), "获取设置")
        return normalize_settings(response)

    def setting(self, path: str, default: Any = None) -> Any:
        """按点号路径读取单个设置.

        Example:
            >>> admin.setting("index.number_of_replicas")
            '0'
        """
        settings = self.settings()
        entry = settings.get(self._name)
        if entry is None:
            raise MalformedResponseError(f"设置响应中缺少索引 '{self._name}'")
        return get(entry["settings"], path, default)

    def update_settings(self, settings: IndexSettings | dict[str, Any]) -> AckResult:
        """更新索引设置.

        Args:
            settings: 要更新的设置，支持点号键 {"index.number_of_replicas": 1}
                或嵌套格式 {"index": {"number_of_replicas": 1}}

        Raises:
            InvalidSettingError: 服务端拒绝该设置时抛出（例如非动态设置）
        """
        if not settings:
            raise ValueError("settings 不能为空")

        status, response = self._execute(
            HttpMethod.PUT, self._path("_settings"), dict(settings)
        )
        if status == 400:
            info = error_info(response)
            raise InvalidSettingError(
                f"索引 '{self._name}' 设置更新被拒绝: {info.reason}",
                status_code=status,
                body=response,
            )
        self._raise_for_status(status, response, "更新设置")

        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 设置更新成功")
        return result

    # ==================== 映射 ====================

    def mapping(self, type_name: str | None = None) -> dict[str, MappingSet]:
        """获取索引映射.

        Args:
            type_name: 只获取指定文档类型的映射（可选）

        Returns:
            {索引名: {类型名: 类型映射}}，映射为空时为 {索引名: {}}
        """
        path = self._path("_mapping", type_name) if type_name else self._path("_mapping")
        status, response = self._execute(HttpMethod.GET, path)
        if status == 404 and type_name and not is_index_missing(response):
            return {self._name: {}}
        self._raise_for_status(status, response, "获取映射")
        return normalize_mappings(response or {}, self._name, type_name)

    def update_mapping(
        self, type_name: str, body: TypeMapping | dict[str, Any]
    ) -> AckResult:
        """更新文档类型映射.

        新字段合并到该类型已有的字段中，不会删除已有字段。

        Args:
            type_name: 文档类型名称
            body: 映射，可以是 {类型名: {"properties": ...}} 或 {"properties": ...}

        Example:
            >>> admin.update_mapping(
            ...     "doco", {"doco": {"properties": {"author": {"type": "string"}}}}
            ... )
        """
        if not type_name:
            raise ValueError("type_name 不能为空")

        response = self._request(
            HttpMethod.PUT,
            self._path("_mapping", type_name),
            "更新映射",
            body=dict(body),
        )
        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 类型 '{type_name}' 映射更新成功")
        return result

    def delete_mapping(self, type_name: str) -> AckResult:
        """删除文档类型映射.

        幂等操作：类型不存在时同样返回已确认的结果。
        """
        if not type_name:
            raise ValueError("type_name 不能为空")

        status, response = self._execute(
            HttpMethod.DELETE, self._path("_mapping", type_name)
        )
        if status == 404 and not is_index_missing(response):
            logger.warning(f"索引 '{self._name}' 类型 '{type_name}' 不存在，视为已删除")
            return AckResult(acknowledged=True, raw=response or {})
        self._raise_for_status(status, response, "删除映射")

        result = self.policy.acknowledged(response)
        if result.acknowledged:
            logger.info(f"索引 '{self._name}' 类型 '{type_name}' 映射已删除")
        return result

    # ==================== 别名 ====================

    def get_aliases(self) -> dict[str, Document]:
        """获取索引的所有别名.

        别名的增删由 ClusterAdmin.update_aliases 完成。

        Returns:
            {索引名: {"aliases": {别名: 别名配置}}}
        """
        response = self._request(HttpMethod.GET, self._path("_aliases"), "获取别名")
        return normalize_aliases(response)

    # ==================== 分析 ====================

    def analyze_tokens(
        self,
        text: str,
        analyzer: str | None = None,
        *,
        index: bool = True,
        **options: Any,
    ) -> list[AnalyzedToken]:
        """使用分析器处理文本.

        Args:
            text: 原始文本
            analyzer: 分析器名称（可选）
            index: 是否使用该索引上定义的分析器，False 时调用集群级 /_analyze
            **options: 其他分析参数，例如 tokenizer、filter、char_filter、field

        Returns:
            按顺序排列的词元列表
        """
        body: Document = {"text": text}
        if analyzer:
            body["analyzer"] = analyzer
        body.update({key: value for key, value in options.items() if value is not None})

        path = self._path("_analyze") if index else "/_analyze"
        status, response = self._execute(HttpMethod.GET, path, body)
        self._raise_for_status(status, response, "分析文本")

        tokens = require(response, "tokens")
        if not isinstance(tokens, list):
            raise MalformedResponseError("分析响应中的 'tokens' 不是列表")

        result = []
        for item in tokens:
            if not isinstance(item, Mapping):
                raise MalformedResponseError(f"分析响应中的词元不是 JSON 对象: {item!r}")
            result.append(
                AnalyzedToken(
                    token=require(item, "token"),
                    start_offset=item.get("start_offset", 0),
                    end_offset=item.get("end_offset", 0),
                    type=item.get("type", ""),
                    position=item.get("position", 0),
                )
            )
        return result

    def analyze(
        self,
        text: str,
        analyzer: str | None = None,
        *,
        index: bool = True,
        **options: Any,
    ) -> list[str]:
        """使用分析器处理文本，只返回词元文本.

        Example:
            >>> admin.analyze("Just a few words to analyze.", "simple", index=False)
            ['just', 'a', 'few', 'words', 'to', 'analyze']
        """
        tokens = self.analyze_tokens(text, analyzer, index=index, **options)
        return [token.token for token in tokens]

    # ==================== 数据面操作 ====================

    def refresh(self) -> ShardResult:
        """刷新索引，使最近写入的文档可被搜索."""
        return self._shard_operation(self._path("_refresh"), "refresh")

    def flush(
        self,
        force: bool | None = None,
        wait_if_ongoing: bool | None = None,
    ) -> ShardResult:
        """把内存中的数据刷写到磁盘."""
        return self._shard_operation(
            self._path("_flush"),
            "flush",
            _params(force=force, wait_if_ongoing=wait_if_ongoing) or None,
        )

    def optimize(
        self,
        max_num_segments: int | None = None,
        only_expunge_deletes: bool | None = None,
        flush: bool | None = None,
    ) -> ShardResult:
        """合并索引段.

        Args:
            max_num_segments: 合并后的最大段数
            only_expunge_deletes: 是否只清除已标记删除的文档
            flush: 合并后是否执行 flush
        """
        params = _params(
            max_num_segments=max_num_segments,
            only_expunge_deletes=only_expunge_deletes,
            flush=flush,
        )
        return self._shard_operation(self._path("_optimize"), "optimize", params or None)

    def clear_cache(
        self,
        fielddata: bool | None = None,
        query: bool | None = None,
        request: bool | None = None,
    ) -> ShardResult:
        """清理索引缓存，不指定类型时清理全部缓存."""
        params = _params(fielddata=fielddata, query=query, request=request)
        return self._shard_operation(
            self._path("_cache", "clear"), "clear_cache", params or None
        )

    def snapshot(self) -> ShardResult:
        """执行 gateway snapshot.

        该接口在 1.2.0 中被移除。构造时提供了 server_version 的，
        会在请求前检查；服务端直接拒绝该接口时同样抛出异常。

        Raises:
            UnsupportedOperationError: 服务端不支持该接口时抛出
        """
        if self.server_version is not None:
            self.policy.require_snapshot_support(self.server_version)

        path = self._path("_gateway", "snapshot")
        status, response = self._execute(HttpMethod.POST, path)
        if status in _UNSUPPORTED_ENDPOINT_STATUSES and not is_index_missing(response):
            raise UnsupportedOperationError(
                f"服务端不支持 gateway snapshot 接口: HTTP {status}"
            )
        self._raise_for_status(status, response, "snapshot")

        result = self.policy.shards(response or {})
        if result.ok:
            logger.info(f"索引 '{self._name}' snapshot 成功")
        return result

    # ==================== 诊断信息 ====================

    def stats(self) -> Document:
        """获取索引统计信息（原始响应）."""
        return self._request(HttpMethod.GET, self._path("_stats"), "获取统计")

    def index_stats(self) -> Document:
        """获取本索引的统计条目.

        兼容 indices 与 _all.indices 两种格式。

        Raises:
            MalformedResponseError: 响应中找不到本索引时抛出
        """
        indices = get_indices(self.stats())
        if self._name not in indices:
            raise MalformedResponseError(f"统计响应中缺少索引 '{self._name}'")
        return indices[self._name]

    def status(self) -> Document:
        """获取索引状态（原始响应）."""
        return self._request(HttpMethod.GET, self._path("_status"), "获取状态")

    def segments(self) -> Document:
        """获取索引段信息（原始响应）."""
        return self._request(HttpMethod.GET, self._path("_segments"), "获取段信息")
