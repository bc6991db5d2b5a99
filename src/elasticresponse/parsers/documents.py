"""
单文档及集群命令响应模型.

包含获取文档、写入单个文档、索引管理命令以及集群根接口（ping）的响应.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from elasticresponse.classifier.models import ErrorKind, Outcome
from elasticresponse.common import ShardSummary, get_dict, get_int, get_str
from elasticresponse.parsers.types import deserialize_source
from elasticresponse.typing import JsonDict

T = TypeVar("T")


@dataclass(frozen=True)
class GetResponse:
    """
    获取文档响应.

    文档或索引不存在时 found 为 False，通过 not_found 区分具体原因.

    Attributes:
        index: 索引名
        doc_id: 文档 ID
        found: 文档是否存在
        version: 文档版本
        seq_no: 序列号
        primary_term: 主分片任期
        routing: 路由值
        source: 文档源数据
        fields: stored_fields 返回的字段

    示例:
        response = parse_get(status, body)

        if response.found:
            user = response.deserialize(User)
        elif response.not_found is ErrorKind.INDEX_NOT_FOUND:
            print("索引不存在")
    """

    index: str
    doc_id: str
    found: bool
    version: int | None = None
    seq_no: int | None = None
    primary_term: int | None = None
    routing: str | None = None
    source: Any = None
    fields: Mapping[str, Any] | None = field(default=None, repr=False)
    outcome: Outcome = field(default_factory=lambda: Outcome.success(None), repr=False)

    @property
    def not_found(self) -> ErrorKind | None:
        return self.outcome.not_found_kind

    def deserialize(self, target: Callable[[Any], T] | type[T]) -> T | None:
        """将源数据转换为指定类型，文档不存在时返回 None."""
        if not self.found:
            return None
        return deserialize_source(self.source, target)

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> GetResponse:
        """从 ES 响应字典创建."""
        outcome = outcome or Outcome.success(body)
        error_index = outcome.error.index if outcome.error else None
        fields = body.get("fields")
        doc_id = body.get("_id")
        return cls(
            index=get_str(body, "_index") or error_index or "",
            doc_id=str(doc_id) if doc_id is not None else "",
            found=body.get("found") is True and not outcome.is_not_found,
            version=get_int(body, "_version"),
            seq_no=get_int(body, "_seq_no"),
            primary_term=get_int(body, "_primary_term"),
            routing=get_str(body, "_routing"),
            source=body.get("_source"),
            fields=fields if isinstance(fields, dict) else None,
            outcome=outcome,
        )


@dataclass(frozen=True)
class DocumentResponse:
    """
    单文档写入响应（index / create / update / delete）.

    Attributes:
        index: 索引名
        doc_id: 文档 ID
        result: 操作结果（created / updated / deleted / noop / not_found）
        version: 文档版本
        seq_no: 序列号
        primary_term: 主分片任期
        shards: 分片摘要
        forced_refresh: 是否强制刷新
    """

    index: str
    doc_id: str
    result: str | None = None
    version: int | None = None
    seq_no: int | None = None
    primary_term: int | None = None
    shards: ShardSummary = field(default_factory=ShardSummary)
    forced_refresh: bool = False
    outcome: Outcome = field(default_factory=lambda: Outcome.success(None), repr=False)

    @property
    def created(self) -> bool:
        return self.result == "created"

    @property
    def deleted(self) -> bool:
        return self.result == "deleted"

    @property
    def not_found(self) -> ErrorKind | None:
        return self.outcome.not_found_kind

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> DocumentResponse:
        """从 ES 响应字典创建，未找到时索引名取自错误详情."""
        outcome = outcome or Outcome.success(body)
        error_index = outcome.error.index if outcome.error else None
        doc_id = body.get("_id")
        return cls(
            index=get_str(body, "_index") or error_index or "",
            doc_id=str(doc_id) if doc_id is not None else "",
            result=get_str(body, "result"),
            version=get_int(body, "_version"),
            seq_no=get_int(body, "_seq_no"),
            primary_term=get_int(body, "_primary_term"),
            shards=ShardSummary.from_dict(body.get("_shards")),
            forced_refresh=body.get("forced_refresh") is True,
            outcome=outcome,
        )


@dataclass(frozen=True)
class CommandResponse:
    """
    索引管理命令响应（创建/删除索引、更新设置、别名操作等）.

    Attributes:
        acknowledged: 集群是否确认
        shards_acknowledged: 分片是否确认（创建索引时返回）
        index: 相关索引名（创建索引时返回）
    """

    acknowledged: bool
    shards_acknowledged: bool | None = None
    index: str | None = None
    outcome: Outcome = field(default_factory=lambda: Outcome.success(None), repr=False)

    @property
    def not_found(self) -> ErrorKind | None:
        return self.outcome.not_found_kind

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> CommandResponse:
        """从 ES 响应字典创建."""
        outcome = outcome or Outcome.success(body)
        error_index = outcome.error.index if outcome.error else None
        shards_acknowledged = body.get("shards_acknowledged")
        return cls(
            acknowledged=body.get("acknowledged") is True,
            shards_acknowledged=(
                shards_acknowledged if isinstance(shards_acknowledged, bool) else None
            ),
            index=get_str(body, "index") or error_index,
            outcome=outcome,
        )


@dataclass(frozen=True)
class PingResponse:
    """
    集群根接口响应.

    Attributes:
        name: 节点名称
        cluster_name: 集群名称
        cluster_uuid: 集群 UUID
        version_number: ES 版本号
        lucene_version: Lucene 版本号
        build_flavor: 构建类型
        tagline: 标语
    """

    name: str | None = None
    cluster_name: str | None = None
    cluster_uuid: str | None = None
    version_number: str | None = None
    lucene_version: str | None = None
    build_flavor: str | None = None
    tagline: str | None = None
    outcome: Outcome = field(default_factory=lambda: Outcome.success(None), repr=False)

    @property
    def not_found(self) -> ErrorKind | None:
        return self.outcome.not_found_kind

    @property
    def major_version(self) -> int | None:
        """主版本号."""
        if not self.version_number:
            return None
        head = self.version_number.split(".", 1)[0]
        return int(head) if head.isdigit() else None

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> PingResponse:
        """从 ES 响应字典创建."""
        version = get_dict(body, "version")
        return cls(
            name=get_str(body, "name"),
            cluster_name=get_str(body, "cluster_name"),
            cluster_uuid=get_str(body, "cluster_uuid"),
            version_number=get_str(version, "number"),
            lucene_version=get_str(version, "lucene_version"),
            build_flavor=get_str(version, "build_flavor"),
            tagline=get_str(body, "tagline"),
            outcome=outcome or Outcome.success(body),
        )
