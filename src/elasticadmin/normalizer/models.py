"""响应规范化数据模型定义模块."""

from dataclasses import dataclass
from enum import Enum


class SettingsShape(Enum):
    """索引设置的响应格式枚举.

    ES 1.0 之前返回扁平的点号键 {"index.number_of_shards": "3"}，
    之后统一返回嵌套对象 {"index": {"number_of_shards": "3"}}。

    Attributes:
        FLAT: 扁平点号键
        NESTED: 嵌套对象
        MIXED: 两种格式同时出现
        EMPTY: 空设置
    """

    FLAT = "flat"
    NESTED = "nested"
    MIXED = "mixed"
    EMPTY = "empty"


@dataclass(frozen=True)
class ErrorInfo:
    """错误响应信息.

    旧版本服务端的 error 字段是字符串（例如 "IndexMissingException[[idx] missing]"），
    新版本是对象（例如 {"type": "index_not_found_exception", "reason": "..."}）。

    Attributes:
        type: 错误类型
        reason: 错误原因
    """

    type: str = ""
    reason: str = ""

    def matches(self, *markers: str) -> bool:
        """判断错误类型或原因中是否包含任意一个标记."""
        text = f"{self.type} {self.reason}"
        return any(marker in text for marker in markers)
