"""响应分类数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OutcomeKind(Enum):
    """响应分类结果枚举."""

    SUCCESS = "success"
    NOT_FOUND_BUT_VALID = "not_found_but_valid"
    PARTIAL_FAILURE = "partial_failure"
    FAILURE = "failure"


class ErrorKind(Enum):
    """错误类型枚举.

    顶层响应与批量操作单项共用同一套错误分类。
    """

    MALFORMED_RESPONSE = "malformed_response"
    INDEX_NOT_FOUND = "index_not_found"
    DOCUMENT_NOT_FOUND = "document_not_found"
    VERSION_CONFLICT = "version_conflict"
    UNAUTHORIZED = "unauthorized"
    REQUEST_TOO_LARGE = "request_too_large"
    TOO_MANY_REQUESTS = "too_many_requests"
    BAD_REQUEST = "bad_request"
    INDEX_ALREADY_EXISTS = "index_already_exists"
    SERVER_ERROR = "server_error"
    ITEM_MALFORMED = "item_malformed"
    UNKNOWN = "unknown"


class ResponseFamily(Enum):
    """响应所属的操作族.

    调用方根据自己发出的请求类型选择，决定 404 响应体中哪些结构可视为合法的空结果。
    """

    SEARCH = "search"
    BULK = "bulk"
    GET = "get"
    DOCUMENT = "document"
    COMMAND = "command"
    PING = "ping"


@dataclass(frozen=True)
class ApiError:
    """结构化的 API 错误.

    Attributes:
        kind: 错误类型
        status: HTTP 状态码（批量操作单项缺失状态码时为 None）
        reason: 错误原因，缺失时回退为原始响应内容
        error_type: 响应体中的 error.type
        caused_by: 根本原因，格式为 "type: reason"
        index: 相关索引名
        raw: 原始响应体
    """

    kind: ErrorKind
    status: int | None
    reason: str
    error_type: str | None = None
    caused_by: str | None = None
    index: str | None = None
    raw: Any = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        return f"[{self.kind.value}] status={self.status}: {self.reason}"


@dataclass(frozen=True)
class Outcome:
    """
    响应分类结果.

    Attributes:
        kind: 分类结果
        body: 已解析的顶层 JSON
        error: FAILURE 时为错误详情，NOT_FOUND_BUT_VALID 时记录具体的未找到类型

    示例:
        outcome = classify_outcome(404, body, ResponseFamily.SEARCH)

        if outcome.is_not_found:
            print(outcome.not_found_kind)  # ErrorKind.INDEX_NOT_FOUND
    """

    kind: OutcomeKind
    body: Any = field(default=None, repr=False, compare=False)
    error: ApiError | None = None

    @classmethod
    def success(cls, body: Any) -> Outcome:
        return cls(OutcomeKind.SUCCESS, body)

    @classmethod
    def not_found(cls, body: Any, error: ApiError) -> Outcome:
        return cls(OutcomeKind.NOT_FOUND_BUT_VALID, body, error)

    @classmethod
    def partial_failure(cls, body: Any) -> Outcome:
        return cls(OutcomeKind.PARTIAL_FAILURE, body)

    @classmethod
    def failure(cls, body: Any, error: ApiError) -> Outcome:
        return cls(OutcomeKind.FAILURE, body, error)

    @property
    def is_ok(self) -> bool:
        """是否可以构建结果模型（非 FAILURE）."""
        return self.kind is not OutcomeKind.FAILURE

    @property
    def is_not_found(self) -> bool:
        return self.kind is OutcomeKind.NOT_FOUND_BUT_VALID

    @property
    def not_found_kind(self) -> ErrorKind | None:
        """未找到的具体类型（索引或文档）."""
        if self.kind is OutcomeKind.NOT_FOUND_BUT_VALID and self.error is not None:
            return self.error.kind
        return None
