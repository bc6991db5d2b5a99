"""
搜索响应模型.

提供命中文档与顶层聚合的惰性迭代器.
模型在解析时一次性构建，之后只读；迭代器不可原地重置，
需要再次遍历时从模型重新获取即可.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from elasticresponse.classifier.exceptions import MalformedResponseError
from elasticresponse.classifier.models import ApiError, ErrorKind, Outcome
from elasticresponse.common import ShardSummary, get_dict, get_float, get_int, get_str
from elasticresponse.parsers.aggregations import AggregationNode, build_aggregations
from elasticresponse.parsers.types import DocumentHit
from elasticresponse.typing import JsonDict

T = TypeVar("T")


class HitsIterator(Iterator[DocumentHit]):
    """命中文档迭代器.

    按引擎返回的顺序逐个产出 DocumentHit，长度受当前页大小限制而非 total_hits。
    """

    def __init__(self, hits: tuple[DocumentHit, ...]):
        self._hits = hits
        self._position = 0

    def __iter__(self) -> HitsIterator:
        return self

    def __next__(self) -> DocumentHit:
        if self._position >= len(self._hits):
            raise StopIteration
        hit = self._hits[self._position]
        self._position += 1
        return hit

    def __length_hint__(self) -> int:
        return len(self._hits) - self._position


class AggregationsIterator(Iterator[tuple[str, AggregationNode]]):
    """顶层聚合迭代器.

    按响应顺序产出 (名称, 聚合节点)。只遍历顶层，嵌套聚合由调用方通过节点按名称访问。
    """

    def __init__(self, aggregations: Mapping[str, AggregationNode]):
        self._items = iter(aggregations.items())
        self._remaining = len(aggregations)

    def __iter__(self) -> AggregationsIterator:
        return self

    def __next__(self) -> tuple[str, AggregationNode]:
        name, node = next(self._items)
        self._remaining -= 1
        return name, node

    def __length_hint__(self) -> int:
        return self._remaining


class SearchResponse:
    """
    搜索响应.

    Attributes:
        took: 查询耗时（毫秒）
        timed_out: 是否超时
        shards: 分片摘要
        total_hits: 命中总数（响应中缺失时为 0）
        total_relation: 总数关系（"eq" / "gte"），缺失时为 None
        max_score: 最高相关性得分
        scroll_id: scroll 查询的游标
        pit_id: point in time ID
        terminated_early: 是否提前终止
        outcome: 响应分类结果

    示例:
        response = parse_search(status, body)

        print(f"共 {response.total_hits} 条记录")
        for hit in response.hits():
            print(hit.doc_id, hit.source)

        for name, agg in response.aggregations():
            print(name, agg.kind)
    """

    def __init__(
        self,
        *,
        took: int = 0,
        timed_out: bool = False,
        shards: ShardSummary | None = None,
        total_hits: int = 0,
        total_relation: str | None = None,
        max_score: float | None = None,
        hits: tuple[DocumentHit, ...] = (),
        aggregations: Mapping[str, AggregationNode] | None = None,
        scroll_id: str | None = None,
        pit_id: str | None = None,
        terminated_early: bool | None = None,
        outcome: Outcome | None = None,
    ) -> None:
        self._took = took
        self._timed_out = timed_out
        self._shards = shards or ShardSummary()
        self._total_hits = total_hits
        self._total_relation = total_relation
        self._max_score = max_score
        self._hits = hits
        self._aggregations = MappingProxyType(dict(aggregations or {}))
        self._scroll_id = scroll_id
        self._pit_id = pit_id
        self._terminated_early = terminated_early
        self._outcome = outcome or Outcome.success(None)

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> SearchResponse:
        """
        从 ES 搜索响应构建.

        兼容 ES 7.x+ 的 total 对象格式和早期的整数格式，缺失字段使用默认值.

        Raises:
            MalformedResponseError: hits 数组中存在非对象元素
        """
        hits_info = get_dict(body, "hits")

        total_info = hits_info.get("total")
        if isinstance(total_info, dict):
            total_hits = get_int(total_info, "value", 0)
            total_relation = get_str(total_info, "relation")
        else:
            total_hits = get_int(hits_info, "total", 0)
            total_relation = "eq" if "total" in hits_info else None

        raw_hits = hits_info.get("hits")
        raw_hits = raw_hits if isinstance(raw_hits, list) else []
        for position, hit in enumerate(raw_hits):
            if not isinstance(hit, dict):
                raise MalformedResponseError(
                    ApiError(
                        kind=ErrorKind.MALFORMED_RESPONSE,
                        status=None,
                        reason=f"hits[{position}] is not an object",
                        raw=body,
                    )
                )
        hits = tuple(DocumentHit.from_dict(hit) for hit in raw_hits)

        terminated_early = body.get("terminated_early")

        return cls(
            took=get_int(body, "took", 0),
            timed_out=body.get("timed_out") is True,
            shards=ShardSummary.from_dict(body.get("_shards")),
            total_hits=total_hits,
            total_relation=total_relation,
            max_score=get_float(hits_info, "max_score"),
            hits=hits,
            aggregations=build_aggregations(body.get("aggregations")),
            scroll_id=get_str(body, "_scroll_id"),
            pit_id=get_str(body, "pit_id"),
            terminated_early=terminated_early if isinstance(terminated_early, bool) else None,
            outcome=outcome,
        )

    @classmethod
    def empty(cls, outcome: Outcome | None = None) -> SearchResponse:
        """创建空结果（用于索引不存在等合法的 404 响应）."""
        return cls(outcome=outcome)

    # ========== 迭代方法 ==========

    def hits(self) -> HitsIterator:
        """获取命中文档迭代器，每次调用返回新的迭代器."""
        return HitsIterator(self._hits)

    def aggregations(self) -> AggregationsIterator:
        """获取顶层聚合迭代器，每次调用返回新的迭代器."""
        return AggregationsIterator(self._aggregations)

    def aggregation(self, name: str) -> AggregationNode | None:
        """按名称获取顶层聚合."""
        return self._aggregations.get(name)

    def documents(self, target: Callable[[Any], T] | type[T] | None = None) -> list[Any]:
        """
        获取所有命中文档的源数据.

        Args:
            target: 目标类型或转换函数，None 表示返回原始源数据

        Returns:
            文档列表
        """
        if target is None:
            return [hit.source for hit in self._hits]
        return [hit.deserialize(target) for hit in self._hits]

    # ========== 属性 ==========

    def total_hits(self) -> int:
        return self._total_hits

    @property
    def total_relation(self) -> str | None:
        return self._total_relation

    @property
    def max_score(self) -> float | None:
        return self._max_score

    @property
    def took(self) -> int:
        return self._took

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    @property
    def shards(self) -> ShardSummary:
        return self._shards

    @property
    def scroll_id(self) -> str | None:
        return self._scroll_id

    @property
    def pit_id(self) -> str | None:
        return self._pit_id

    @property
    def terminated_early(self) -> bool | None:
        return self._terminated_early

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def not_found(self) -> ErrorKind | None:
        """合法 404 时的未找到类型，正常响应为 None."""
        return self._outcome.not_found_kind

    def __len__(self) -> int:
        """当前页的命中数."""
        return len(self._hits)

    def __repr__(self) -> str:
        return (
            f"SearchResponse(total_hits={self._total_hits}, hits={len(self._hits)}, "
            f"aggregations={list(self._aggregations)}, outcome={self._outcome.kind.value})"
        )
