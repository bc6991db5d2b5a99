"""响应模型模块.

提供搜索结果、聚合树以及单文档响应的结构化模型.
"""

from elasticresponse.parsers.aggregations import (
    AggregationKind,
    AggregationNode,
    Bucket,
    BucketAggregation,
    MetricAggregation,
    SingleBucketAggregation,
    UnrecognizedAggregation,
    build_aggregation,
    build_aggregations,
)
from elasticresponse.parsers.documents import (
    CommandResponse,
    DocumentResponse,
    GetResponse,
    PingResponse,
)
from elasticresponse.parsers.search import (
    AggregationsIterator,
    HitsIterator,
    SearchResponse,
)
from elasticresponse.parsers.types import (
    DocumentHit,
    PercentilesResult,
    StatsResult,
)

__all__ = [
    "SearchResponse",
    "HitsIterator",
    "AggregationsIterator",
    "DocumentHit",
    "AggregationKind",
    "AggregationNode",
    "Bucket",
    "BucketAggregation",
    "MetricAggregation",
    "SingleBucketAggregation",
    "UnrecognizedAggregation",
    "build_aggregation",
    "build_aggregations",
    "StatsResult",
    "PercentilesResult",
    "GetResponse",
    "DocumentResponse",
    "CommandResponse",
    "PingResponse",
]
