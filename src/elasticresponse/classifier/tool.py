"""响应分类核心工具类."""

from __future__ import annotations

import logging
from typing import Any

from .constants import BULK_ACTIONS, ErrorTypes, StatusCodes, is_success_status
from .models import ErrorKind, Outcome, ResponseFamily
from .taxonomy import (
    api_error_from_body,
    bulk_item_error,
    get_error_type,
    has_error_object,
)

logger = logging.getLogger(__name__)


class OutcomeClassifier:
    """响应分类器.

    根据 HTTP 状态码和已解析的顶层 JSON 判定响应结果，纯函数、无副作用：
    - SUCCESS: 2xx 且顶层没有 error
    - NOT_FOUND_BUT_VALID: 404 且响应体符合该操作族可识别的"索引/文档不存在"结构
    - PARTIAL_FAILURE: 2xx 的批量响应中至少有一项失败
    - FAILURE: 其余所有情况

    Args:
        family: 响应所属的操作族

    Example:
        >>> classifier = OutcomeClassifier(ResponseFamily.BULK)
        >>> outcome = classifier.classify(200, body)
        >>> outcome.kind
        <OutcomeKind.PARTIAL_FAILURE: 'partial_failure'>
    """

    def __init__(self, family: ResponseFamily = ResponseFamily.SEARCH):
        self.family = family

    def classify(self, status: int, body: Any) -> Outcome:
        """对响应进行分类.

        Args:
            status: HTTP 状态码
            body: 已解析的顶层 JSON（空响应体为 None）

        Returns:
            分类结果
        """
        if is_success_status(status):
            outcome = self._classify_success(status, body)
        elif status == StatusCodes.NOT_FOUND:
            outcome = self._classify_not_found(status, body)
        else:
            outcome = Outcome.failure(body, api_error_from_body(status, body))

        logger.debug(
            f"响应分类: family={self.family.value}, status={status}, "
            f"outcome={outcome.kind.value}"
        )
        return outcome

    def _classify_success(self, status: int, body: Any) -> Outcome:
        if has_error_object(body):
            return Outcome.failure(body, api_error_from_body(status, body))

        if not isinstance(body, dict):
            return Outcome.failure(
                body,
                api_error_from_body(status, body, kind=ErrorKind.MALFORMED_RESPONSE),
            )

        if self.family is ResponseFamily.BULK:
            items = body.get("items")
            if not isinstance(items, list):
                return Outcome.failure(
                    body,
                    api_error_from_body(status, body, kind=ErrorKind.MALFORMED_RESPONSE),
                )
            if any(self._bulk_entry_failed(entry) for entry in items):
                return Outcome.partial_failure(body)

        return Outcome.success(body)

    def _classify_not_found(self, status: int, body: Any) -> Outcome:
        kind = self._recognize_not_found(body)
        if kind is None:
            # 不是合法空结果的 404 按错误分类处理，没有 error.type 时为 UNKNOWN
            return Outcome.failure(body, api_error_from_body(status, body))
        return Outcome.not_found(body, api_error_from_body(status, body, kind=kind))

    def _recognize_not_found(self, body: Any) -> ErrorKind | None:
        """识别当前操作族的合法 404 结构.

        index_not_found_exception 对所有操作族都是合法的空结果，
        文档不存在的结构按操作族分别识别。
        """
        if not isinstance(body, dict):
            return None

        error_type = get_error_type(body)
        if error_type == ErrorTypes.INDEX_NOT_FOUND:
            return ErrorKind.INDEX_NOT_FOUND

        if self.family is ResponseFamily.GET and body.get("found") is False:
            return ErrorKind.DOCUMENT_NOT_FOUND

        if self.family is ResponseFamily.DOCUMENT and (
            body.get("result") == "not_found"
            or error_type == ErrorTypes.DOCUMENT_MISSING
        ):
            return ErrorKind.DOCUMENT_NOT_FOUND

        return None

    @staticmethod
    def _bulk_entry_failed(entry: Any) -> bool:
        if not isinstance(entry, dict) or len(entry) != 1:
            return True
        op_type, payload = next(iter(entry.items()))
        if op_type not in BULK_ACTIONS:
            return True
        return bulk_item_error(payload) is not None


def classify_outcome(
    status: int,
    body: Any,
    family: ResponseFamily = ResponseFamily.SEARCH,
) -> Outcome:
    """对响应进行分类的便捷函数.

    Example:
        >>> classify_outcome(404, {"error": {"type": "index_not_found_exception"}}).kind
        <OutcomeKind.NOT_FOUND_BUT_VALID: 'not_found_but_valid'>
    """
    return OutcomeClassifier(family).classify(status, body)
