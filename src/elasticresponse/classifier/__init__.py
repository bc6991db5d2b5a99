"""响应分类模块.

该模块根据 HTTP 状态码和响应体结构判定 ES 响应的结果，包括：
- 成功 / 合法的未找到 / 部分失败 / 失败 四种分类
- 顶层响应与批量操作单项共用的错误分类
- 按错误类型细分的异常

示例用法:
    >>> from elasticresponse.classifier import OutcomeClassifier, ResponseFamily
    >>> classifier = OutcomeClassifier(ResponseFamily.SEARCH)
    >>> outcome = classifier.classify(404, {"error": {"type": "index_not_found_exception"}})
    >>> outcome.not_found_kind
    <ErrorKind.INDEX_NOT_FOUND: 'index_not_found'>
"""

from .models import (
    ApiError,
    ErrorKind,
    Outcome,
    OutcomeKind,
    ResponseFamily,
)
from .taxonomy import api_error_from_body, bulk_item_error, error_kind_for
from .tool import OutcomeClassifier, classify_outcome
from .exceptions import (
    ApiResponseError,
    AuthorizationError,
    BadRequestError,
    DocumentNotFoundError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MalformedResponseError,
    RequestTooLargeError,
    ServerError,
    TooManyRequestsError,
    UnknownApiError,
    VersionConflictError,
    api_exception_for,
)

__all__ = [
    "ApiError",
    "ErrorKind",
    "Outcome",
    "OutcomeKind",
    "ResponseFamily",
    "OutcomeClassifier",
    "classify_outcome",
    "error_kind_for",
    "api_error_from_body",
    "bulk_item_error",
    "api_exception_for",
    "ApiResponseError",
    "MalformedResponseError",
    "IndexNotFoundError",
    "DocumentNotFoundError",
    "VersionConflictError",
    "AuthorizationError",
    "RequestTooLargeError",
    "TooManyRequestsError",
    "BadRequestError",
    "IndexAlreadyExistsError",
    "ServerError",
    "UnknownApiError",
]
