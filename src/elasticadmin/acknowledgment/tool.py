"""写操作确认策略模块.

HTTP 200 并不保证写操作已完全生效，本模块根据操作类型把响应解释为
成功或失败的结论。
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..exceptions import MalformedResponseError, UnsupportedOperationError
from ..normalizer import get, require
from ..version import supports_gateway_snapshots
from .models import OPERATION_KINDS, AckResult, OperationKind, ShardResult

logger = logging.getLogger(__name__)


def _as_int(value: Any, path: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"字段 '{path}' 不是整数: {value!r}") from e


class AcknowledgmentPolicy:
    """写操作确认策略.

    - 结构性操作：acknowledged 为 True 即成功
    - 数据面操作：_shards.failed 为 0 即成功，部分失败以 ShardResult 返回

    Example:
        >>> policy = AcknowledgmentPolicy()
        >>> policy.acknowledged({"acknowledged": True}).ok
        True
        >>> policy.shards({"_shards": {"total": 2, "successful": 1, "failed": 1}}).ok
        False
    """

    def acknowledged(self, response: Any) -> AckResult:
        """解释结构性操作的响应.

        0.90 的部分接口（例如删除映射）只返回 {"ok": true}，
        缺少 acknowledged 时以 ok 代替。

        Args:
            response: 服务端响应

        Returns:
            AckResult

        Raises:
            MalformedResponseError: 响应中既没有 acknowledged 也没有 ok 时抛出
        """
        if not isinstance(response, Mapping):
            raise MalformedResponseError(f"写操作响应不是 JSON 对象: {response!r}")

        if "acknowledged" in response:
            acknowledged = response["acknowledged"] is True
        elif "ok" in response:
            acknowledged = response["ok"] is True
        else:
            raise MalformedResponseError("写操作响应中缺少字段 'acknowledged'")

        if not acknowledged:
            logger.warning(f"写操作未被确认: {dict(response)}")
        return AckResult(acknowledged=acknowledged, raw=dict(response))

    def shards(self, response: Any) -> ShardResult:
        """解释数据面操作的响应.

        Args:
            response: 服务端响应，包含 _shards.total/successful/failed

        Returns:
            ShardResult，部分失败时 ok 为 False

        Raises:
            MalformedResponseError: 响应中缺少 _shards 时抛出
        """
        shards = require(response, "_shards")
        if not isinstance(shards, Mapping):
            raise MalformedResponseError("响应中的 '_shards' 不是 JSON 对象")

        result = ShardResult(
            total=_as_int(get(shards, "total", 0), "_shards.total"),
            successful=_as_int(get(shards, "successful", 0), "_shards.successful"),
            failed=_as_int(require(shards, "failed"), "_shards.failed"),
            failures=list(get(shards, "failures", [])),
            raw=dict(response),
        )
        if result.partial_failure:
            logger.warning(f"{result.failed}/{result.total} 个分片失败")
        return result

    def verdict(self, operation: str, response: Any) -> AckResult | ShardResult:
        """按操作名称选择判定方式.

        Args:
            operation: 操作名称，见 OPERATION_KINDS
            response: 服务端响应

        Raises:
            ValueError: 未知的操作名称
        """
        kind = OPERATION_KINDS.get(operation)
        if kind is None:
            raise ValueError(f"未知的写操作: '{operation}'")
        if kind is OperationKind.STRUCTURAL:
            return self.acknowledged(response)
        return self.shards(response)

    def require_snapshot_support(
        self,
        version: str | tuple[int, ...],
        predicate: Callable[[str | tuple[int, ...]], bool] = supports_gateway_snapshots,
    ) -> None:
        """确认服务端支持 gateway snapshot.

        Raises:
            UnsupportedOperationError: 服务端版本不支持时抛出
        """
        if not predicate(version):
            raise UnsupportedOperationError(
                f"服务端版本 {version} 不支持 gateway snapshot 接口"
            )
