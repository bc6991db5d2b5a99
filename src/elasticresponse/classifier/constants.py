"""响应分类相关常量定义模块."""


class ErrorTypes:
    """ES 响应体中 error.type 的常见取值."""

    INDEX_NOT_FOUND = "index_not_found_exception"
    DOCUMENT_MISSING = "document_missing_exception"
    VERSION_CONFLICT = "version_conflict_engine_exception"
    RESOURCE_ALREADY_EXISTS = "resource_already_exists_exception"
    INDEX_ALREADY_EXISTS = "index_already_exists_exception"
    SECURITY = "security_exception"
    PARSING = "parsing_exception"
    MAPPER_PARSING = "mapper_parsing_exception"
    DOCUMENT_PARSING = "document_parsing_exception"
    ACTION_REQUEST_VALIDATION = "action_request_validation_exception"
    ILLEGAL_ARGUMENT = "illegal_argument_exception"
    X_CONTENT_PARSE = "x_content_parse_exception"
    REJECTED_EXECUTION = "es_rejected_execution_exception"
    CIRCUIT_BREAKING = "circuit_breaking_exception"


class StatusCodes:
    """HTTP 状态码常量."""

    OK_MIN = 200
    OK_MAX = 299
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    PAYLOAD_TOO_LARGE = 413
    TOO_MANY_REQUESTS = 429
    SERVER_ERROR_MIN = 500


def is_success_status(status: int) -> bool:
    """判断状态码是否在 2xx 范围内."""
    return StatusCodes.OK_MIN <= status <= StatusCodes.OK_MAX


# 批量响应 items 中可识别的操作类型
BULK_ACTIONS = frozenset({"index", "create", "update", "delete"})
