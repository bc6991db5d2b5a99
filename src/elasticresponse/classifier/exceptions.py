"""响应分类异常定义模块."""

from __future__ import annotations

from ..exceptions import ElasticResponseError
from .models import ApiError, ErrorKind


class ApiResponseError(ElasticResponseError):
    """API 响应错误基础异常类.

    所有由响应分类得出的失败都以该类的子类抛出，
    通过 error 属性可获取结构化的错误详情。

    Attributes:
        error: 结构化错误
    """

    def __init__(self, error: ApiError):
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def status(self) -> int | None:
        return self.error.status


class MalformedResponseError(ApiResponseError):
    """响应体不是合法 JSON 或缺少分类所需的结构."""

    pass


class IndexNotFoundError(ApiResponseError):
    """索引不存在."""

    pass


class DocumentNotFoundError(ApiResponseError):
    """文档不存在."""

    pass


class VersionConflictError(ApiResponseError):
    """版本冲突."""

    pass


class AuthorizationError(ApiResponseError):
    """认证或授权失败."""

    pass


class RequestTooLargeError(ApiResponseError):
    """请求体过大."""

    pass


class TooManyRequestsError(ApiResponseError):
    """集群拒绝执行（线程池队列满或熔断）."""

    pass


class BadRequestError(ApiResponseError):
    """请求不合法（解析失败、映射错误、参数错误等）."""

    pass


class IndexAlreadyExistsError(ApiResponseError):
    """索引已存在."""

    pass


class ServerError(ApiResponseError):
    """服务端错误."""

    pass


class UnknownApiError(ApiResponseError):
    """无法归类的响应，保留原始消息."""

    pass


_EXCEPTION_CLASSES: dict[ErrorKind, type[ApiResponseError]] = {
    ErrorKind.MALFORMED_RESPONSE: MalformedResponseError,
    ErrorKind.INDEX_NOT_FOUND: IndexNotFoundError,
    ErrorKind.DOCUMENT_NOT_FOUND: DocumentNotFoundError,
    ErrorKind.VERSION_CONFLICT: VersionConflictError,
    ErrorKind.UNAUTHORIZED: AuthorizationError,
    ErrorKind.REQUEST_TOO_LARGE: RequestTooLargeError,
    ErrorKind.TOO_MANY_REQUESTS: TooManyRequestsError,
    ErrorKind.BAD_REQUEST: BadRequestError,
    ErrorKind.INDEX_ALREADY_EXISTS: IndexAlreadyExistsError,
    ErrorKind.SERVER_ERROR: ServerError,
}


def api_exception_for(error: ApiError) -> ApiResponseError:
    """根据错误类型创建对应的异常实例."""
    exc_class = _EXCEPTION_CLASSES.get(error.kind, UnknownApiError)
    return exc_class(error)
