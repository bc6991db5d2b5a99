"""批量响应数据模型定义模块."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from collections.abc import Iterator
from typing import Any

from elasticresponse.classifier.models import ApiError, ErrorKind, Outcome, OutcomeKind
from elasticresponse.classifier.taxonomy import bulk_item_error
from elasticresponse.common import ShardSummary, get_int, get_str
from elasticresponse.typing import JsonDict

from .exceptions import BulkItemsFailedError

logger = logging.getLogger(__name__)


class BulkAction(Enum):
    """批量操作类型枚举."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class BulkItemOk:
    """批量操作单项的成功信息.

    Attributes:
        result: 操作结果（created / updated / deleted / noop）
        version: 文档版本
        seq_no: 序列号
        primary_term: 主分片任期
        shards: 分片摘要
    """

    result: str
    version: int | None = None
    seq_no: int | None = None
    primary_term: int | None = None
    shards: ShardSummary | None = None


@dataclass(frozen=True)
class BulkItemResult:
    """批量操作单项结果.

    Attributes:
        action: 操作类型（无法识别时为 None）
        index: 索引名
        doc_id: 文档ID
        status: 单项状态码
        outcome: 成功时为 BulkItemOk，失败时为 ApiError
    """

    action: BulkAction | None
    index: str
    doc_id: str
    status: int | None
    outcome: BulkItemOk | ApiError

    @property
    def is_ok(self) -> bool:
        return isinstance(self.outcome, BulkItemOk)

    @property
    def ok(self) -> BulkItemOk | None:
        return self.outcome if isinstance(self.outcome, BulkItemOk) else None

    @property
    def error(self) -> ApiError | None:
        return self.outcome if isinstance(self.outcome, ApiError) else None

    @classmethod
    def from_dict(cls, entry: Any) -> BulkItemResult:
        """从 items 数组中的单项创建.

        单项格式为 {"<操作类型>": {...}}，无法识别的结构归为 ITEM_MALFORMED 失败项。
        """
        if not isinstance(entry, dict) or len(entry) != 1:
            logger.warning(f"无法识别的批量响应项: {entry}")
            return cls(
                action=None,
                index="",
                doc_id="",
                status=None,
                outcome=ApiError(
                    kind=ErrorKind.ITEM_MALFORMED,
                    status=None,
                    reason="bulk item must hold exactly one action",
                    raw=entry,
                ),
            )

        op_type, payload = next(iter(entry.items()))
        try:
            action = BulkAction(op_type)
        except ValueError:
            action = None

        index = get_str(payload, "_index", "")
        doc_id = payload.get("_id") if isinstance(payload, dict) else None
        status = get_int(payload, "status")

        error = bulk_item_error(payload)
        if error is None and action is None:
            error = ApiError(
                kind=ErrorKind.ITEM_MALFORMED,
                status=status,
                reason=f"unknown bulk action '{op_type}'",
                index=index or None,
                raw=payload,
            )

        if error is not None:
            if error.kind is ErrorKind.ITEM_MALFORMED:
                logger.warning(f"批量响应项结构不完整: {op_type} {index}/{doc_id}")
            outcome: BulkItemOk | ApiError = error
        else:
            outcome = BulkItemOk(
                result=payload["result"],
                version=get_int(payload, "_version"),
                seq_no=get_int(payload, "_seq_no"),
                primary_term=get_int(payload, "_primary_term"),
                shards=(
                    ShardSummary.from_dict(payload["_shards"])
                    if isinstance(payload.get("_shards"), dict)
                    else None
                ),
            )

        return cls(
            action=action,
            index=index,
            doc_id=str(doc_id) if doc_id is not None else "",
            status=status,
            outcome=outcome,
        )


class BulkResponse:
    """批量响应.

    items 保持响应中的原始顺序，ok / err 是按顺序过滤得到的两个分区，
    满足 len(items) == len(ok) + len(err)，且不会按索引、ID 或操作类型重排。

    单项失败不会中断解析：即使所有项都失败，仍返回完整的模型。

    Attributes:
        took: 耗时（毫秒）
        errors: 响应中的 errors 标记
        ingest_took: ingest pipeline 耗时（毫秒）
        outcome: 响应分类结果

    Example:
        >>> response = parse_bulk(200, body)
        >>> for item in response.err():
        ...     print(item.index, item.doc_id, item.error.reason)
    """

    def __init__(
        self,
        items: tuple[BulkItemResult, ...],
        took: int = 0,
        errors: bool = False,
        ingest_took: int | None = None,
        outcome: Outcome | None = None,
    ) -> None:
        self._items = items
        self._ok = tuple(item for item in items if item.is_ok)
        self._err = tuple(item for item in items if not item.is_ok)
        self._took = took
        self._errors = errors
        self._ingest_took = ingest_took
        self._outcome = outcome or Outcome(
            OutcomeKind.PARTIAL_FAILURE if self._err else OutcomeKind.SUCCESS
        )

    @classmethod
    def from_dict(cls, body: JsonDict, outcome: Outcome | None = None) -> BulkResponse:
        """从 ES 批量响应构建."""
        raw_items = body.get("items")
        items = tuple(
            BulkItemResult.from_dict(entry)
            for entry in (raw_items if isinstance(raw_items, list) else [])
        )
        errors = body.get("errors") is True

        response = cls(
            items=items,
            took=get_int(body, "took", 0),
            errors=errors,
            ingest_took=get_int(body, "ingest_took"),
            outcome=outcome,
        )

        if errors != bool(response._err):
            logger.debug(
                f"批量响应 errors 标记为 {errors}，实际失败项 {len(response._err)} 个"
            )
        return response

    def items(self) -> tuple[BulkItemResult, ...]:
        """所有单项结果（原始顺序）."""
        return self._items

    def ok(self) -> tuple[BulkItemResult, ...]:
        """成功项（保持原始相对顺序）."""
        return self._ok

    def err(self) -> tuple[BulkItemResult, ...]:
        """失败项（保持原始相对顺序）."""
        return self._err

    @property
    def took(self) -> int:
        return self._took

    @property
    def errors(self) -> bool:
        return self._errors

    @property
    def ingest_took(self) -> int | None:
        return self._ingest_took

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def not_found(self) -> ErrorKind | None:
        """索引不存在等合法 404 时的未找到类型，此时 items 为空."""
        return self._outcome.not_found_kind

    def is_success(self) -> bool:
        """判断是否全部成功."""
        return not self._err

    def count_by_result(self) -> dict[str, int]:
        """按 result 统计成功项数量，如 {"created": 2, "updated": 1}."""
        counts: dict[str, int] = {}
        for item in self._ok:
            result = item.ok.result if item.ok else ""
            counts[result] = counts.get(result, 0) + 1
        return counts

    def raise_for_errors(self) -> None:
        """存在失败项时抛出 BulkItemsFailedError."""
        if self._err:
            raise BulkItemsFailedError(self)

    def get_error_summary(self, limit: int = 10) -> str:
        """获取错误摘要."""
        if not self._err:
            return "No errors"
        summary = f"Total errors: {len(self._err)}\n"
        for i, item in enumerate(self._err[:limit], 1):
            error = item.error
            summary += (
                f"{i}. [{item.action.value if item.action else 'unknown'}] "
                f"Index: {item.index}, DocID: {item.doc_id}, "
                f"Status: {item.status}, Kind: {error.kind.value if error else ''}, "
                f"Reason: {error.reason if error else ''}\n"
            )
        if len(self._err) > limit:
            summary += f"... and {len(self._err) - limit} more errors\n"
        return summary

    def __iter__(self) -> Iterator[BulkItemResult]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"BulkResponse(took={self._took}, items={len(self._items)}, "
            f"ok={len(self._ok)}, err={len(self._err)})"
        )


@dataclass(frozen=True)
class BulkErrorsResponse:
    """仅保留失败项的批量响应.

    适用于大批量写入只关心失败项的场景。

    Attributes:
        took: 耗时（毫秒）
        total: 单项总数
        ok_count: 成功项数量
        errors: 失败项（保持原始相对顺序）
        outcome: 响应分类结果
    """

    took: int
    total: int
    ok_count: int
    errors: tuple[BulkItemResult, ...]
    outcome: Outcome

    def is_success(self) -> bool:
        return not self.errors

    def __iter__(self) -> Iterator[BulkItemResult]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @classmethod
    def from_response(cls, response: BulkResponse) -> BulkErrorsResponse:
        return cls(
            took=response.took,
            total=len(response.items()),
            ok_count=len(response.ok()),
            errors=response.err(),
            outcome=response.outcome,
        )
