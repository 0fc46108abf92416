"""服务端版本能力判断模块.

调用方（以及测试）根据服务端版本选择期望的响应格式或可用的接口，
IndexAdmin 本身不解析版本字符串。

使用示例:
    >>> from elasticadmin.version import supports_gateway_snapshots
    >>> supports_gateway_snapshots("1.1.2")
    True
    >>> supports_gateway_snapshots("1.2.0")
    False
"""

import re

# gateway snapshot 接口在 1.2.0 中被移除
GATEWAY_SNAPSHOT_REMOVED_IN = (1, 2, 0)

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+(?:\.\d+)*)")


def parse_version(version: str | tuple[int, ...]) -> tuple[int, ...]:
    """将版本字符串解析为整数元组.

    忽略预发布后缀，例如 "1.0.0.RC1"、"5.0.0-alpha1"、"7.10.2-SNAPSHOT"。

    Args:
        version: 版本字符串或已解析的版本元组

    Returns:
        版本号元组，例如 (1, 2, 0)

    Raises:
        ValueError: 版本字符串无法解析时抛出
    """
    if isinstance(version, tuple):
        if not version:
            raise ValueError(f"无法解析版本号: {version!r}")
        return version
    if not isinstance(version, str):
        raise ValueError(f"无法解析版本号: {version!r}")

    match = _VERSION_PATTERN.match(version)
    if not match:
        raise ValueError(f"无法解析版本号: {version!r}")

    # 去掉 "1.0.0.RC1" 这类后缀中残留的空段
    return tuple(int(part) for part in match.group(1).split(".") if part)


def _pad(version: tuple[int, ...], length: int = 3) -> tuple[int, ...]:
    return version + (0,) * (length - len(version))


def supports_gateway_snapshots(version: str | tuple[int, ...]) -> bool:
    """判断服务端是否支持 gateway snapshot 接口."""
    return _pad(parse_version(version)) < GATEWAY_SNAPSHOT_REMOVED_IN


def is_major_version(version: str | tuple[int, ...], major: int) -> bool:
    """判断服务端主版本号是否为 major."""
    return parse_version(version)[0] == major
