"""聚合结果节点单元测试."""

import logging

from elasticresponse import (
    AggregationKind,
    BucketAggregation,
    MetricAggregation,
    SingleBucketAggregation,
    UnrecognizedAggregation,
    parse_search,
)
from elasticresponse.parsers import build_aggregation, build_aggregations

AGG_BODY = {
    "took": 5,
    "hits": {"total": {"value": 30, "relation": "eq"}, "hits": []},
    "aggregations": {
        "by_status": {
            "doc_count_error_upper_bound": 0,
            "sum_other_doc_count": 2,
            "buckets": [
                {
                    "key": "error",
                    "doc_count": 20,
                    "by_host": {
                        "buckets": [
                            {"key": "web-1", "doc_count": 15, "avg_latency": {"value": 120.5}},
                            {"key": "web-2", "doc_count": 5, "avg_latency": {"value": 80.0}},
                        ]
                    },
                },
                {
                    "key": "warning",
                    "doc_count": 8,
                    "by_host": {"buckets": []},
                },
            ],
        },
        "unique_users": {"value": 17},
        "latency_stats": {"count": 30, "min": 1.0, "max": 300.0, "avg": 90.0, "sum": 2700.0},
        "latency_pct": {"values": {"50.0": 85.0, "95.0": 250.0, "99.0": 295.0}},
        "only_errors": {
            "doc_count": 20,
            "max_latency": {"value": 300.0},
        },
        "top_docs": {"hits": {"total": {"value": 1}, "hits": [{"_id": "x"}]}},
    },
}


class TestStructuralSniffing:
    """根据 JSON 结构判定节点类型的测试."""

    def test_bucket(self):
        """测试包含 buckets 的聚合."""
        node = build_aggregation("by_status", AGG_BODY["aggregations"]["by_status"])

        assert isinstance(node, BucketAggregation)
        assert node.kind is AggregationKind.BUCKET
        assert node.sum_other_doc_count == 2
        assert node.doc_count_error_upper_bound == 0

    def test_single_value_metric(self):
        """测试单值指标."""
        node = build_aggregation("unique_users", {"value": 17})

        assert isinstance(node, MetricAggregation)
        assert node.kind is AggregationKind.METRIC
        assert node.value == 17

    def test_stats_metric(self):
        """测试 stats 指标."""
        node = build_aggregation("latency_stats", AGG_BODY["aggregations"]["latency_stats"])

        assert node.kind is AggregationKind.METRIC
        assert node.value is None
        stats = node.as_stats()
        assert stats.count == 30
        assert stats.avg == 90.0
        assert stats.variance is None

    def test_percentiles_metric(self):
        """测试百分位数指标."""
        node = build_aggregation("latency_pct", AGG_BODY["aggregations"]["latency_pct"])

        pct = node.as_percentiles()
        assert pct.p50 == 85.0
        assert pct.p95 == 250.0
        assert pct.get_percentile(99) == 295.0
        assert pct.get_percentile(75.0) is None

    def test_percentiles_list_format(self):
        """测试 keyed=false 的百分位数格式."""
        node = build_aggregation(
            "pct",
            {"values": [{"key": 50.0, "value": 10.0}, {"key": 99.0, "value": 42.0}]},
        )

        assert node.as_percentiles().p99 == 42.0

    def test_single_bucket(self):
        """测试单桶聚合."""
        node = build_aggregation("only_errors", AGG_BODY["aggregations"]["only_errors"])

        assert isinstance(node, SingleBucketAggregation)
        assert node.doc_count == 20
        assert node.aggregation("max_latency").value == 300.0

    def test_unrecognized(self):
        """测试无法识别的结构保留原始数据."""
        raw = AGG_BODY["aggregations"]["top_docs"]

        node = build_aggregation("top_docs", raw)

        assert isinstance(node, UnrecognizedAggregation)
        assert node.kind is AggregationKind.UNRECOGNIZED
        assert node.raw == raw

    def test_non_object(self):
        """测试非对象聚合."""
        assert build_aggregation("weird", 3).kind is AggregationKind.UNRECOGNIZED

    def test_keyed_buckets(self):
        """测试对象格式的 buckets."""
        node = build_aggregation(
            "by_range",
            {
                "buckets": {
                    "cheap": {"to": 100.0, "doc_count": 4},
                    "expensive": {"from": 100.0, "doc_count": 2},
                }
            },
        )

        assert node.keyed is True
        assert node.keys() == ["cheap", "expensive"]
        assert node.bucket("cheap").extra["to"] == 100.0
        assert node.bucket("expensive").doc_count == 2

    def test_bucket_not_object(self, caplog):
        """测试包含非对象桶时整体保留原始数据并记录警告."""
        raw = {"buckets": [{"key": "a", "doc_count": 1}, None]}

        with caplog.at_level(logging.WARNING, logger="elasticresponse.parsers.aggregations"):
            node = build_aggregation("by_tag", raw)

        assert isinstance(node, UnrecognizedAggregation)
        assert node.raw == raw
        assert "by_tag" in caplog.text

    def test_buckets_not_collection(self):
        """测试 buckets 既不是数组也不是对象."""
        node = build_aggregation("by_tag", {"buckets": "oops"})

        assert node.kind is AggregationKind.UNRECOGNIZED

    def test_meta_is_not_sub_aggregation(self):
        """测试 meta 不视为子聚合."""
        node = build_aggregation(
            "filtered",
            {"doc_count": 3, "meta": {"owner": "ops"}, "avg": {"value": 1.0}},
        )

        assert list(node.aggregations) == ["avg"]


class TestNestedTraversal:
    """嵌套聚合访问测试."""

    def test_two_level_terms(self):
        """测试两层 terms 聚合按名称逐层访问."""
        response = parse_search(200, AGG_BODY)

        by_status = response.aggregation("by_status")
        error_bucket = by_status.bucket("error")
        by_host = error_bucket.aggregation("by_host")
        web1 = by_host.bucket("web-1")

        assert error_bucket.doc_count == 20
        assert isinstance(by_host, BucketAggregation)
        assert [bucket.key for bucket in by_host] == ["web-1", "web-2"]
        assert web1["avg_latency"].value == 120.5
        assert "avg_latency" in web1

    def test_empty_nested_buckets(self):
        """测试子聚合没有桶."""
        response = parse_search(200, AGG_BODY)

        warning = response.aggregation("by_status").bucket("warning")

        assert len(warning.aggregation("by_host")) == 0

    def test_missing_names(self):
        """测试不存在的名称."""
        response = parse_search(200, AGG_BODY)

        assert response.aggregation("nope") is None
        assert response.aggregation("by_status").bucket("nope") is None
        assert response.aggregation("by_status").bucket("error").aggregation("nope") is None

    def test_key_as_string_lookup(self):
        """测试按 key_as_string 查找桶."""
        node = build_aggregation(
            "per_day",
            {
                "buckets": [
                    {"key_as_string": "2024-01-01", "key": 1704067200000, "doc_count": 3},
                ]
            },
        )

        assert node.bucket("2024-01-01").key == 1704067200000
        assert node.bucket(1704067200000).key_as_string == "2024-01-01"


class TestAggregationsIterator:
    """顶层聚合迭代器测试."""

    def test_response_order(self):
        """测试按响应顺序遍历顶层聚合."""
        response = parse_search(200, AGG_BODY)

        names = [name for name, _ in response.aggregations()]

        assert names == list(AGG_BODY["aggregations"])

    def test_only_top_level(self):
        """测试迭代器不展开嵌套聚合."""
        response = parse_search(200, AGG_BODY)

        assert len(list(response.aggregations())) == 6

    def test_reiterable_from_model(self):
        """测试可从模型重新获取迭代器."""
        response = parse_search(200, AGG_BODY)

        first = response.aggregations()
        list(first)

        assert list(first) == []
        assert len(list(response.aggregations())) == 6

    def test_build_aggregations_without_section(self):
        """测试响应中没有聚合."""
        assert dict(build_aggregations(None)) == {}
