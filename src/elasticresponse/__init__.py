"""Elastic Response - Elasticsearch 响应分类与结构化模型.

这是一个将 Elasticsearch HTTP 响应（状态码 + JSON 响应体）解析为结构化结果的 Python 库。
网络请求、重试、连接管理由 HTTP 客户端负责，本库只处理已读取的响应。

主要功能:
    - OutcomeClassifier: 根据状态码和响应体结构判定成功 / 合法的未找到 / 部分失败 / 失败
    - SearchResponse: 命中文档与聚合树的惰性遍历
    - BulkResponse: 批量操作单项结果的有序成功 / 失败分区
    - ResponseParser: 各操作族的解析入口

使用示例:
    from elasticresponse import parse_search, parse_bulk

    response = parse_search(200, body)
    for hit in response.hits():
        print(hit.doc_id, hit.source)

    bulk = parse_bulk(200, bulk_body)
    for item in bulk.err():
        print(item.doc_id, item.error.reason)
"""

__version__ = "0.1.0"

# 导出批量响应
from elasticresponse.bulk import (
    BulkAction,
    BulkErrorsResponse,
    BulkItemOk,
    BulkItemResult,
    BulkItemsFailedError,
    BulkResponse,
    BulkResponseError,
)

# 导出响应分类
from elasticresponse.classifier import (
    ApiError,
    ApiResponseError,
    AuthorizationError,
    BadRequestError,
    DocumentNotFoundError,
    ErrorKind,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    MalformedResponseError,
    Outcome,
    OutcomeClassifier,
    OutcomeKind,
    RequestTooLargeError,
    ResponseFamily,
    ServerError,
    TooManyRequestsError,
    UnknownApiError,
    VersionConflictError,
    classify_outcome,
)

# 导出配置
from elasticresponse.config import ParserConfig

# 导出异常
from elasticresponse.exceptions import ElasticResponseError, ParserConfigError

# 导出响应模型
from elasticresponse.parsers import (
    AggregationKind,
    AggregationNode,
    Bucket,
    BucketAggregation,
    CommandResponse,
    DocumentHit,
    DocumentResponse,
    GetResponse,
    MetricAggregation,
    PingResponse,
    SearchResponse,
    SingleBucketAggregation,
    UnrecognizedAggregation,
)

# 导出解析入口
from elasticresponse.parsing import (
    ResponseParser,
    load_body,
    parse,
    parse_api_error,
    parse_api_response,
    parse_bulk,
    parse_bulk_errors,
    parse_command,
    parse_document,
    parse_get,
    parse_ping,
    parse_search,
)

__all__ = [
    # 版本
    "__version__",
    # 解析入口
    "ResponseParser",
    "ParserConfig",
    "parse",
    "parse_search",
    "parse_bulk",
    "parse_bulk_errors",
    "parse_get",
    "parse_document",
    "parse_command",
    "parse_ping",
    "parse_api_response",
    "parse_api_error",
    "load_body",
    # 响应分类
    "OutcomeClassifier",
    "classify_outcome",
    "Outcome",
    "OutcomeKind",
    "ErrorKind",
    "ResponseFamily",
    "ApiError",
    # 搜索响应
    "SearchResponse",
    "DocumentHit",
    "AggregationKind",
    "AggregationNode",
    "Bucket",
    "BucketAggregation",
    "MetricAggregation",
    "SingleBucketAggregation",
    "UnrecognizedAggregation",
    # 单文档与命令响应
    "GetResponse",
    "DocumentResponse",
    "CommandResponse",
    "PingResponse",
    # 批量响应
    "BulkAction",
    "BulkItemOk",
    "BulkItemResult",
    "BulkResponse",
    "BulkErrorsResponse",
    # 异常
    "ElasticResponseError",
    "ParserConfigError",
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
    "BulkResponseError",
    "BulkItemsFailedError",
]
