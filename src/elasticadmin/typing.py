"""elasticadmin 类型定义模块."""

from typing import Any, Dict

# JSON 文档类型（请求体或响应体）
Document = Dict[str, Any]

# 查询参数类型
# 格式: {参数名: 参数值}
Params = Dict[str, Any]
