"""
搜索结果数据类型定义.

包含命中文档、统计聚合结果、百分位数结果等数据类.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from elasticresponse.common import get_float, get_int, get_str
from elasticresponse.typing import JsonDict

T = TypeVar("T")


def deserialize_source(source: Any, target: Callable[[Any], T] | type[T]) -> T:
    """
    将文档源数据转换为调用方的业务类型.

    dataclass 类型按字段展开构造，其余可调用对象直接以源数据为参数调用.
    """
    if (
        isinstance(target, type)
        and dataclasses.is_dataclass(target)
        and isinstance(source, dict)
    ):
        return target(**source)
    return target(source)


@dataclass(frozen=True)
class DocumentHit:
    """
    命中文档.

    文档源数据保持为原始 JSON 结构，不绑定任何业务类型，
    需要时通过 deserialize 转换.

    Attributes:
        index: 索引名
        doc_id: 文档 ID
        score: 相关性得分（按字段排序时为 None）
        version: 文档版本（查询未开启 version 时为 None）
        source: 文档源数据
        highlight: 高亮字段映射，key 为字段名，value 为高亮片段列表
        explanation: 评分解释
        sort: 排序值
        fields: docvalue_fields / fields 返回的字段
        routing: 路由值

    示例:
        for hit in response.hits():
            print(f"文档: {hit.doc_id}, 得分: {hit.score}")
            alert = hit.deserialize(AlertDoc)
    """

    index: str
    doc_id: str
    score: float | None = None
    version: int | None = None
    source: Any = None
    highlight: Mapping[str, list[str]] | None = None
    explanation: Mapping[str, Any] | None = field(default=None, repr=False)
    sort: tuple[Any, ...] | None = None
    fields: Mapping[str, Any] | None = field(default=None, repr=False)
    routing: str | None = None

    def deserialize(self, target: Callable[[Any], T] | type[T]) -> T:
        """
        将源数据转换为指定类型.

        Args:
            target: 目标类型或转换函数

        Returns:
            转换后的对象
        """
        return deserialize_source(self.source, target)

    def get_highlight(self, field_name: str, default: str = "") -> str:
        """获取指定字段的第一个高亮片段."""
        fragments = (self.highlight or {}).get(field_name, [])
        return fragments[0] if fragments else default

    def get_all_highlights(self, field_name: str) -> list[str]:
        """获取指定字段的所有高亮片段."""
        return list((self.highlight or {}).get(field_name, []))

    @classmethod
    def from_dict(cls, data: JsonDict) -> DocumentHit:
        """从 ES 响应的单个 hit 字典创建."""
        sort = data.get("sort")
        highlight = data.get("highlight")
        explanation = data.get("_explanation")
        fields = data.get("fields")
        doc_id = data.get("_id")
        return cls(
            index=get_str(data, "_index", ""),
            doc_id=str(doc_id) if doc_id is not None else "",
            score=get_float(data, "_score"),
            version=get_int(data, "_version"),
            source=data.get("_source"),
            highlight=highlight if isinstance(highlight, dict) else None,
            explanation=explanation if isinstance(explanation, dict) else None,
            sort=tuple(sort) if isinstance(sort, list) else None,
            fields=fields if isinstance(fields, dict) else None,
            routing=get_str(data, "_routing"),
        )


@dataclass(frozen=True)
class StatsResult:
    """
    统计聚合结果（stats / extended_stats）.

    Attributes:
        count: 文档数量
        min: 最小值
        max: 最大值
        avg: 平均值
        sum: 总和
        variance: 方差（extended_stats）
        std_deviation: 标准差（extended_stats）
        std_deviation_bounds: 标准差边界（extended_stats）
    """

    count: int
    min: float | None
    max: float | None
    avg: float | None
    sum: float | None
    variance: float | None = None
    std_deviation: float | None = None
    std_deviation_bounds: Mapping[str, float] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StatsResult:
        """从聚合结果字典创建."""
        bounds = data.get("std_deviation_bounds")
        return cls(
            count=get_int(data, "count", 0),
            min=get_float(data, "min"),
            max=get_float(data, "max"),
            avg=get_float(data, "avg"),
            sum=get_float(data, "sum"),
            variance=get_float(data, "variance"),
            std_deviation=get_float(data, "std_deviation"),
            std_deviation_bounds=bounds if isinstance(bounds, dict) else None,
        )


@dataclass(frozen=True)
class PercentilesResult:
    """
    百分位数聚合结果.

    Attributes:
        values: 百分位数值映射，key 为百分位（如 "50.0"），value 为对应值
    """

    values: Mapping[str, float | None]

    def get_percentile(self, percentile: float) -> float | None:
        """
        获取指定百分位的值.

        Args:
            percentile: 百分位数（如 50.0, 95.0, 99.0）

        Returns:
            百分位值或 None
        """
        float_key = f"{float(percentile)}"
        if float_key in self.values:
            return self.values[float_key]

        if percentile == int(percentile):
            int_key = str(int(percentile))
            if int_key in self.values:
                return self.values[int_key]

        return None

    @property
    def p50(self) -> float | None:
        return self.get_percentile(50.0)

    @property
    def p95(self) -> float | None:
        return self.get_percentile(95.0)

    @property
    def p99(self) -> float | None:
        return self.get_percentile(99.0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PercentilesResult:
        """从聚合结果字典创建，兼容 keyed=false 的列表格式."""
        raw_values = data.get("values", {})
        if isinstance(raw_values, list):
            values = {
                f"{float(item['key'])}": item.get("value")
                for item in raw_values
                if isinstance(item, dict) and "key" in item
            }
        elif isinstance(raw_values, dict):
            values = dict(raw_values)
        else:
            values = {}
        return cls(values=values)
