"""
响应模型公共组件.

包含分片摘要以及宽松的 JSON 字段读取函数.
不同版本 ES 的响应结构存在差异，缺失的可选字段统一读为默认值而非报错.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from elasticresponse.typing import JsonDict


def get_dict(data: Any, key: str) -> JsonDict:
    """读取对象类型字段，缺失或类型不符时返回空字典."""
    if not isinstance(data, Mapping):
        return {}
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def get_int(data: Any, key: str, default: int | None = None) -> int | None:
    """读取整数字段，bool 不视为整数."""
    if not isinstance(data, Mapping):
        return default
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def get_float(data: Any, key: str) -> float | None:
    """读取数值字段并转换为 float."""
    if not isinstance(data, Mapping):
        return None
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def get_str(data: Any, key: str, default: str | None = None) -> str | None:
    """读取字符串字段."""
    if not isinstance(data, Mapping):
        return default
    value = data.get(key)
    return value if isinstance(value, str) else default


@dataclass(frozen=True)
class ShardSummary:
    """
    分片摘要.

    Attributes:
        total: 参与的分片总数
        successful: 成功的分片数
        skipped: 跳过的分片数
        failed: 失败的分片数
        failures: 分片失败详情（原始结构）
    """

    total: int = 0
    successful: int = 0
    skipped: int = 0
    failed: int = 0
    failures: tuple[Any, ...] = field(default=(), repr=False)

    @property
    def has_failures(self) -> bool:
        """是否存在失败分片."""
        return self.failed > 0

    @classmethod
    def from_dict(cls, data: Any) -> ShardSummary:
        """从 ES 响应的 _shards 字典创建."""
        failures = data.get("failures") if isinstance(data, Mapping) else None
        return cls(
            total=get_int(data, "total", 0),
            successful=get_int(data, "successful", 0),
            skipped=get_int(data, "skipped", 0),
            failed=get_int(data, "failed", 0),
            failures=tuple(failures) if isinstance(failures, list) else (),
        )
