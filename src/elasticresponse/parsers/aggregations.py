"""
聚合结果节点.

聚合结果是异构且递归嵌套的树（桶中包含子聚合，子聚合中又包含指标），
这里在构建时根据 JSON 结构判定节点类型，调用方无需预先声明聚合名称与类型:
- 包含 buckets：桶聚合（terms、date_histogram、range、filters 等）
- 包含 value / values：指标聚合（avg、cardinality、percentiles 等）
- 包含 doc_count：单桶聚合（filter、nested、global 等）
- stats 风格的标量集合：指标聚合
- 其余：无法识别，保留原始结构

递归访问由调用方按名称逐层进行，不预先展开，以保留名称路径.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Union

from elasticresponse.common import get_int, get_str
from elasticresponse.parsers.types import PercentilesResult, StatsResult
from elasticresponse.typing import JsonDict

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})

# stats 风格指标聚合的字段
_STATS_KEYS = frozenset({"min", "max", "avg", "sum"})

# 桶自身的标准字段，其余对象类型字段视为子聚合
_BUCKET_FIELDS = frozenset({"key", "key_as_string", "doc_count"})


class AggregationKind(Enum):
    """聚合节点类型枚举."""

    BUCKET = "bucket"
    METRIC = "metric"
    SINGLE_BUCKET = "single_bucket"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class MetricAggregation:
    """
    指标聚合结果.

    Attributes:
        name: 聚合名称
        values: 指标字段映射（value、value_as_string、values、count、avg 等）

    示例:
        avg_price = response.aggregation("avg_price")
        print(avg_price.value)
    """

    kind: ClassVar[AggregationKind] = AggregationKind.METRIC

    name: str
    values: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def value(self) -> Any:
        """单值指标的值，多值指标为 None."""
        return self.values.get("value")

    @property
    def value_as_string(self) -> str | None:
        return get_str(self.values, "value_as_string")

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def as_stats(self) -> StatsResult:
        """按 stats / extended_stats 结构解析."""
        return StatsResult.from_dict(self.values)

    def as_percentiles(self) -> PercentilesResult:
        """按 percentiles 结构解析."""
        return PercentilesResult.from_dict(self.values)


@dataclass(frozen=True)
class Bucket:
    """
    聚合桶.

    Attributes:
        key: 桶键值（keyed 格式下为对象中的键名）
        doc_count: 文档数量
        key_as_string: 格式化后的键值（日期直方图等）
        aggregations: 子聚合，名称到聚合节点的映射（按响应顺序）
        extra: 桶的其他标量字段（from、to 等）
    """

    key: Any
    doc_count: int
    key_as_string: str | None = None
    aggregations: Mapping[str, AggregationNode] = field(
        default_factory=lambda: _EMPTY, repr=False
    )
    extra: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, repr=False)

    def aggregation(self, name: str) -> AggregationNode | None:
        """按名称获取子聚合."""
        return self.aggregations.get(name)

    def __getitem__(self, name: str) -> AggregationNode:
        return self.aggregations[name]

    def __contains__(self, name: object) -> bool:
        return name in self.aggregations


@dataclass(frozen=True)
class BucketAggregation:
    """
    桶聚合结果.

    Attributes:
        name: 聚合名称
        buckets: 桶序列（保持响应顺序）
        keyed: 响应中 buckets 是否为对象格式
        doc_count_error_upper_bound: terms 聚合的误差上界
        sum_other_doc_count: 未返回的桶的文档总数
        after_key: composite 聚合的翻页键

    示例:
        by_status = response.aggregation("by_status")
        for bucket in by_status:
            print(f"状态: {bucket.key}, 数量: {bucket.doc_count}")
            by_host = bucket.aggregation("by_host")
    """

    kind: ClassVar[AggregationKind] = AggregationKind.BUCKET

    name: str
    buckets: tuple[Bucket, ...] = ()
    keyed: bool = False
    doc_count_error_upper_bound: int | None = None
    sum_other_doc_count: int | None = None
    after_key: Mapping[str, Any] | None = None

    def bucket(self, key: Any) -> Bucket | None:
        """按 key 或 key_as_string 查找桶."""
        for bucket in self.buckets:
            if bucket.key == key or (
                bucket.key_as_string is not None and bucket.key_as_string == key
            ):
                return bucket
        return None

    def keys(self) -> list[Any]:
        return [bucket.key for bucket in self.buckets]

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)


@dataclass(frozen=True)
class SingleBucketAggregation:
    """
    单桶聚合结果（filter、nested、reverse_nested、global、missing 等）.

    Attributes:
        name: 聚合名称
        doc_count: 文档数量
        aggregations: 子聚合
    """

    kind: ClassVar[AggregationKind] = AggregationKind.SINGLE_BUCKET

    name: str
    doc_count: int = 0
    aggregations: Mapping[str, AggregationNode] = field(
        default_factory=lambda: _EMPTY, repr=False
    )

    def aggregation(self, name: str) -> AggregationNode | None:
        return self.aggregations.get(name)

    def __getitem__(self, name: str) -> AggregationNode:
        return self.aggregations[name]


@dataclass(frozen=True)
class UnrecognizedAggregation:
    """无法识别结构的聚合结果（如 top_hits、geo_bounds），保留原始数据."""

    kind: ClassVar[AggregationKind] = AggregationKind.UNRECOGNIZED

    name: str
    raw: Any = None


AggregationNode = Union[
    MetricAggregation,
    BucketAggregation,
    SingleBucketAggregation,
    UnrecognizedAggregation,
]


def build_aggregation(name: str, raw: Any) -> AggregationNode:
    """
    根据 JSON 结构构建聚合节点.

    Args:
        name: 聚合名称
        raw: 聚合结果的原始字典

    Returns:
        聚合节点
    """
    if not isinstance(raw, dict):
        logger.debug(f"聚合 '{name}' 不是对象，保留原始数据")
        return UnrecognizedAggregation(name=name, raw=raw)

    if "buckets" in raw:
        return _build_bucket_aggregation(name, raw)

    if "value" in raw or "values" in raw:
        return MetricAggregation(name=name, values=MappingProxyType(dict(raw)))

    if "doc_count" in raw:
        return SingleBucketAggregation(
            name=name,
            doc_count=get_int(raw, "doc_count", 0),
            aggregations=_sub_aggregations(raw, exclude={"doc_count"}),
        )

    if "count" in raw and _STATS_KEYS & raw.keys():
        return MetricAggregation(name=name, values=MappingProxyType(dict(raw)))

    logger.debug(f"无法识别聚合 '{name}' 的结构，保留原始数据")
    return UnrecognizedAggregation(name=name, raw=raw)


def build_aggregations(raw: Any) -> Mapping[str, AggregationNode]:
    """构建顶层聚合映射，保持响应顺序."""
    if not isinstance(raw, dict):
        return _EMPTY
    return MappingProxyType(
        {name: build_aggregation(name, value) for name, value in raw.items()}
    )


def _build_bucket_aggregation(name: str, raw: JsonDict) -> AggregationNode:
    raw_buckets = raw["buckets"]
    keyed = isinstance(raw_buckets, dict)

    if keyed:
        entries = [(key, value) for key, value in raw_buckets.items()]
    elif isinstance(raw_buckets, list):
        entries = [(None, value) for value in raw_buckets]
    else:
        logger.warning(f"聚合 '{name}' 的 buckets 既不是数组也不是对象，保留原始数据")
        return UnrecognizedAggregation(name=name, raw=raw)

    if not all(isinstance(value, dict) for _, value in entries):
        logger.warning(f"聚合 '{name}' 包含非对象的桶，保留原始数据")
        return UnrecognizedAggregation(name=name, raw=raw)

    buckets = tuple(_build_bucket(key, value) for key, value in entries)
    after_key = raw.get("after_key")

    return BucketAggregation(
        name=name,
        buckets=buckets,
        keyed=keyed,
        doc_count_error_upper_bound=get_int(raw, "doc_count_error_upper_bound"),
        sum_other_doc_count=get_int(raw, "sum_other_doc_count"),
        after_key=after_key if isinstance(after_key, dict) else None,
    )


def _build_bucket(keyed_name: str | None, raw: JsonDict) -> Bucket:
    key = raw.get("key", keyed_name)
    extra = {
        k: v
        for k, v in raw.items()
        if k not in _BUCKET_FIELDS and not isinstance(v, dict)
    }
    return Bucket(
        key=key,
        doc_count=get_int(raw, "doc_count", 0),
        key_as_string=get_str(raw, "key_as_string"),
        aggregations=_sub_aggregations(raw, exclude=_BUCKET_FIELDS),
        extra=MappingProxyType(extra),
    )


def _sub_aggregations(
    raw: JsonDict,
    exclude: frozenset[str] | set[str],
) -> Mapping[str, AggregationNode]:
    """提取子聚合：对象类型字段中排除标准字段和 meta."""
    children = {
        name: build_aggregation(name, value)
        for name, value in raw.items()
        if name not in exclude and name != "meta" and isinstance(value, dict)
    }
    return MappingProxyType(children) if children else _EMPTY
