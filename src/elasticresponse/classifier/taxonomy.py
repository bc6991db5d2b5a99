"""
错误分类映射.

将 (状态码, error.type) 映射为统一的错误类型.
顶层响应分类与批量操作单项分类共用这里的函数，保证两条失败路径的判定一致.
"""

from __future__ import annotations

import json
from typing import Any

from .constants import ErrorTypes, StatusCodes, is_success_status
from .models import ApiError, ErrorKind

# 先按状态码判定
_STATUS_KINDS: dict[int, ErrorKind] = {
    StatusCodes.BAD_REQUEST: ErrorKind.BAD_REQUEST,
    StatusCodes.UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    StatusCodes.FORBIDDEN: ErrorKind.UNAUTHORIZED,
    StatusCodes.CONFLICT: ErrorKind.VERSION_CONFLICT,
    StatusCodes.PAYLOAD_TOO_LARGE: ErrorKind.REQUEST_TOO_LARGE,
    StatusCodes.TOO_MANY_REQUESTS: ErrorKind.TOO_MANY_REQUESTS,
}

# 再按 error.type 细化
_ERROR_TYPE_KINDS: dict[str, ErrorKind] = {
    ErrorTypes.INDEX_NOT_FOUND: ErrorKind.INDEX_NOT_FOUND,
    ErrorTypes.DOCUMENT_MISSING: ErrorKind.DOCUMENT_NOT_FOUND,
    ErrorTypes.VERSION_CONFLICT: ErrorKind.VERSION_CONFLICT,
    ErrorTypes.RESOURCE_ALREADY_EXISTS: ErrorKind.INDEX_ALREADY_EXISTS,
    ErrorTypes.INDEX_ALREADY_EXISTS: ErrorKind.INDEX_ALREADY_EXISTS,
    ErrorTypes.SECURITY: ErrorKind.UNAUTHORIZED,
    ErrorTypes.PARSING: ErrorKind.BAD_REQUEST,
    ErrorTypes.MAPPER_PARSING: ErrorKind.BAD_REQUEST,
    ErrorTypes.DOCUMENT_PARSING: ErrorKind.BAD_REQUEST,
    ErrorTypes.ACTION_REQUEST_VALIDATION: ErrorKind.BAD_REQUEST,
    ErrorTypes.ILLEGAL_ARGUMENT: ErrorKind.BAD_REQUEST,
    ErrorTypes.X_CONTENT_PARSE: ErrorKind.BAD_REQUEST,
    ErrorTypes.REJECTED_EXECUTION: ErrorKind.TOO_MANY_REQUESTS,
    ErrorTypes.CIRCUIT_BREAKING: ErrorKind.TOO_MANY_REQUESTS,
}


def error_kind_for(status: int | None, error_type: str | None = None) -> ErrorKind:
    """
    根据状态码和 error.type 确定错误类型.

    Args:
        status: HTTP 状态码
        error_type: 响应体中的 error.type，可选

    Returns:
        错误类型

    示例:
        error_kind_for(404, "index_not_found_exception")  # ErrorKind.INDEX_NOT_FOUND
        error_kind_for(503)  # ErrorKind.SERVER_ERROR
        error_kind_for(404)  # ErrorKind.UNKNOWN
    """
    kind = _STATUS_KINDS.get(status) if status is not None else None
    if kind is None:
        if status is not None and status >= StatusCodes.SERVER_ERROR_MIN:
            kind = ErrorKind.SERVER_ERROR
        else:
            kind = ErrorKind.UNKNOWN

    if error_type is not None and error_type in _ERROR_TYPE_KINDS:
        kind = _ERROR_TYPE_KINDS[error_type]

    return kind


def get_error_type(body: Any) -> str | None:
    """提取响应体中的 error.type."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("type"), str):
        return error["type"]
    return None


def has_error_object(body: Any) -> bool:
    """判断响应体顶层是否包含 error 字段（对象或旧版本的字符串）."""
    return isinstance(body, dict) and isinstance(body.get("error"), (dict, str))


def api_error_from_body(
    status: int | None,
    body: Any,
    kind: ErrorKind | None = None,
) -> ApiError:
    """
    从响应体构建结构化错误.

    兼容 error 为对象（ES 5+）和字符串（早期版本）两种格式，
    缺少 reason 时使用原始响应内容，不丢弃任何信息.

    Args:
        status: HTTP 状态码
        body: 已解析的响应体（可能为 None）
        kind: 指定错误类型，None 表示通过 error_kind_for 推导

    Returns:
        结构化错误
    """
    error = body.get("error") if isinstance(body, dict) else None
    error_type: str | None = None
    reason: str | None = None
    caused_by: str | None = None
    index: str | None = None

    if isinstance(error, dict):
        error_type = error.get("type") if isinstance(error.get("type"), str) else None
        reason = error.get("reason") if isinstance(error.get("reason"), str) else None
        index = error.get("index") if isinstance(error.get("index"), str) else None
        cause = error.get("caused_by")
        if isinstance(cause, dict):
            caused_by = f"{cause.get('type', '')}: {cause.get('reason', '')}"
    elif isinstance(error, str):
        reason = error

    if reason is None:
        reason = _raw_message(status, body)

    return ApiError(
        kind=kind or error_kind_for(status, error_type),
        status=status,
        reason=reason,
        error_type=error_type,
        caused_by=caused_by,
        index=index,
        raw=body,
    )


def bulk_item_error(payload: Any) -> ApiError | None:
    """
    判定批量操作单项是否失败.

    只依据单项自身的 status 和 error 字段，与顶层 HTTP 状态码无关:
    - 包含 error 对象：失败，类型由单项状态码和 error.type 推导
    - 既没有 result 也没有 error：ITEM_MALFORMED
    - 状态码不在 2xx 范围内（例如删除不存在的文档）：失败
    - 其余情况：成功，返回 None

    Args:
        payload: 单项操作的结果字典，如 {"_index": ..., "status": 201, "result": "created"}

    Returns:
        失败时返回结构化错误，成功返回 None
    """
    if not isinstance(payload, dict):
        return ApiError(
            kind=ErrorKind.ITEM_MALFORMED,
            status=None,
            reason="bulk item is not an object",
            raw=payload,
        )

    status = payload.get("status")
    if isinstance(status, bool) or not isinstance(status, int):
        status = None

    if has_error_object(payload):
        return api_error_from_body(status, payload)

    result = payload.get("result")
    if not isinstance(result, str):
        return ApiError(
            kind=ErrorKind.ITEM_MALFORMED,
            status=status,
            reason="bulk item carries neither result nor error",
            index=payload.get("_index") if isinstance(payload.get("_index"), str) else None,
            raw=payload,
        )

    if status is not None and not is_success_status(status):
        kind = (
            ErrorKind.DOCUMENT_NOT_FOUND
            if result == "not_found"
            else error_kind_for(status)
        )
        return ApiError(kind=kind, status=status, reason=result, raw=payload)

    return None


def _raw_message(status: int | None, body: Any) -> str:
    if body is None or body == "":
        return f"HTTP {status}"
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False, default=str)
