"""
ES 响应解析入口.

接收 HTTP 状态码和响应体，判定响应结果并构建结构化模型.
网络请求、重试、连接管理均由 HTTP 客户端负责，这里只处理已读取的数据.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from elasticsearch.exceptions import ApiError as ElasticsearchApiError

from elasticresponse.bulk.models import BulkErrorsResponse, BulkResponse
from elasticresponse.classifier.exceptions import api_exception_for
from elasticresponse.classifier.models import (
    ApiError,
    ErrorKind,
    Outcome,
    OutcomeKind,
    ResponseFamily,
)
from elasticresponse.classifier.tool import OutcomeClassifier
from elasticresponse.config import ParserConfig
from elasticresponse.parsers.documents import (
    CommandResponse,
    DocumentResponse,
    GetResponse,
    PingResponse,
)
from elasticresponse.parsers.search import SearchResponse
from elasticresponse.typing import ResponseBody

if TYPE_CHECKING:
    from elastic_transport import ApiResponse

logger = logging.getLogger(__name__)


def load_body(
    body: ResponseBody,
    encoding: str = "utf-8",
    status: int | None = None,
) -> Any:
    """
    将响应体解析为 JSON 值.

    支持字节、字符串、可读流（一次性同步读取）以及已解码的 dict / list.
    空响应体返回 None.

    Args:
        body: 响应体
        encoding: 字节响应体的字符编码
        status: HTTP 状态码，用于错误信息

    Returns:
        解析后的 JSON 值

    Raises:
        MalformedResponseError: 响应体无法解码或不是合法 JSON
        TypeError: 不支持的响应体类型
    """
    if body is None or isinstance(body, (dict, list)):
        return body

    if hasattr(body, "read"):
        body = body.read()

    if isinstance(body, (bytes, bytearray, memoryview)):
        try:
            text = bytes(body).decode(encoding)
        except UnicodeDecodeError as e:
            raise _malformed(f"响应体无法按 {encoding} 解码: {e}", status) from e
    elif isinstance(body, str):
        text = body
    else:
        raise TypeError(f"不支持的响应体类型: {type(body)}")

    if not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise _malformed(f"响应体不是合法的 JSON: {e}", status) from e


def _malformed(reason: str, status: int | None = None) -> Exception:
    return api_exception_for(
        ApiError(kind=ErrorKind.MALFORMED_RESPONSE, status=status, reason=reason)
    )


class ResponseParser:
    """
    ES 响应解析器.

    每个操作族对应一个解析入口，由调用方根据自己发出的请求选择:
    - parse_search: 搜索
    - parse_bulk / parse_bulk_errors: 批量操作
    - parse_get: 获取文档
    - parse_document: 单文档写入
    - parse_command: 索引管理命令
    - parse_ping: 集群根接口

    解析结果是只读模型，失败时抛出 ApiResponseError 子类.
    解析器本身无状态，可以在多个线程间共享.

    使用示例:
        parser = ResponseParser(ParserConfig(raise_on_item_errors=True))

        response = parser.parse_search(status, body)
        for hit in response.hits():
            print(hit.doc_id)
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """
        初始化解析器.

        Args:
            config: 解析器配置，默认使用 ParserConfig()
        """
        self.config = config or ParserConfig()

    # ========== 搜索 ==========

    def parse_search(self, status: int, body: ResponseBody) -> SearchResponse:
        """
        解析搜索响应.

        索引不存在的 404 响应返回空结果，可通过 response.not_found 区分.

        Args:
            status: HTTP 状态码
            body: 响应体

        Returns:
            搜索响应
        """
        outcome = self._classify(ResponseFamily.SEARCH, status, body)
        if outcome.is_not_found:
            return SearchResponse.empty(outcome)
        return SearchResponse.from_dict(outcome.body, outcome)

    # ========== 批量操作 ==========

    def parse_bulk(self, status: int, body: ResponseBody) -> BulkResponse:
        """
        解析批量响应.

        单项失败不会中断解析，部分失败时 outcome 为 PARTIAL_FAILURE，
        失败项通过 response.err() 获取.

        Args:
            status: HTTP 状态码
            body: 响应体

        Returns:
            批量响应

        Raises:
            BulkItemsFailedError: 配置了 raise_on_item_errors 且存在失败项
        """
        outcome = self._classify(ResponseFamily.BULK, status, body)
        response = BulkResponse.from_dict(outcome.body, outcome)

        if outcome.kind is OutcomeKind.PARTIAL_FAILURE:
            logger.warning(
                f"批量响应部分失败: 成功 {len(response.ok())}, 失败 {len(response.err())}"
            )
            if self.config.raise_on_item_errors:
                response.raise_for_errors()

        return response

    def parse_bulk_errors(self, status: int, body: ResponseBody) -> BulkErrorsResponse:
        """解析批量响应，仅保留失败项."""
        return BulkErrorsResponse.from_response(self.parse_bulk(status, body))

    # ========== 单文档与命令 ==========

    def parse_get(self, status: int, body: ResponseBody) -> GetResponse:
        """解析获取文档响应，文档或索引不存在时 found 为 False."""
        outcome = self._classify(ResponseFamily.GET, status, body)
        return GetResponse.from_dict(outcome.body, outcome)

    def parse_document(self, status: int, body: ResponseBody) -> DocumentResponse:
        """解析单文档写入响应，删除不存在的文档时 result 为 not_found."""
        outcome = self._classify(ResponseFamily.DOCUMENT, status, body)
        return DocumentResponse.from_dict(outcome.body, outcome)

    def parse_command(self, status: int, body: ResponseBody) -> CommandResponse:
        """解析索引管理命令响应."""
        outcome = self._classify(ResponseFamily.COMMAND, status, body)
        return CommandResponse.from_dict(outcome.body, outcome)

    def parse_ping(self, status: int, body: ResponseBody) -> PingResponse:
        """解析集群根接口响应."""
        outcome = self._classify(ResponseFamily.PING, status, body)
        return PingResponse.from_dict(outcome.body, outcome)

    def parse(self, family: ResponseFamily, status: int, body: ResponseBody) -> Any:
        """按操作族分派解析."""
        handlers = {
            ResponseFamily.SEARCH: self.parse_search,
            ResponseFamily.BULK: self.parse_bulk,
            ResponseFamily.GET: self.parse_get,
            ResponseFamily.DOCUMENT: self.parse_document,
            ResponseFamily.COMMAND: self.parse_command,
            ResponseFamily.PING: self.parse_ping,
        }
        return handlers[family](status, body)

    # ========== elasticsearch-py 适配 ==========

    def parse_api_response(
        self,
        response: ApiResponse[Any],
        family: ResponseFamily,
    ) -> Any:
        """
        解析 elasticsearch-py 返回的响应对象.

        Args:
            response: 客户端返回的 ObjectApiResponse 等响应对象
            family: 响应所属的操作族

        Returns:
            对应操作族的响应模型

        示例:
            resp = es.search(index="logs", query={"match_all": {}})
            result = parser.parse_api_response(resp, ResponseFamily.SEARCH)
        """
        return self.parse(family, response.meta.status, response.body)

    def parse_api_error(
        self,
        error: ElasticsearchApiError,
        family: ResponseFamily,
    ) -> Any:
        """
        解析 elasticsearch-py 抛出的 ApiError.

        客户端对非 2xx 状态码直接抛出异常，这里将其交给同一套分类逻辑处理，
        例如搜索不存在的索引会得到空的 SearchResponse 而不是异常.

        Args:
            error: 客户端抛出的异常
            family: 响应所属的操作族

        Returns:
            对应操作族的响应模型（仅合法 404 时）

        Raises:
            ApiResponseError: 其余错误按分类结果抛出
        """
        if not isinstance(error, ElasticsearchApiError):
            raise TypeError(f"不支持的异常类型: {type(error)}")
        return self.parse(family, error.meta.status, error.body)

    # ========== 内部辅助方法 ==========

    def _classify(self, family: ResponseFamily, status: int, body: ResponseBody) -> Outcome:
        """解析响应体并分类，失败时抛出对应异常."""
        logger.debug(f"解析 {family.value} 响应: status={status}")
        parsed = load_body(body, self.config.encoding, status)
        outcome = OutcomeClassifier(family).classify(status, parsed)

        if outcome.kind is OutcomeKind.FAILURE:
            raise api_exception_for(outcome.error)

        if outcome.is_not_found and not self.config.not_found_as_empty:
            raise api_exception_for(outcome.error)

        return outcome


_default_parser = ResponseParser()


def parse_search(status: int, body: ResponseBody) -> SearchResponse:
    """解析搜索响应."""
    return _default_parser.parse_search(status, body)


def parse_bulk(status: int, body: ResponseBody) -> BulkResponse:
    """解析批量响应."""
    return _default_parser.parse_bulk(status, body)


def parse_bulk_errors(status: int, body: ResponseBody) -> BulkErrorsResponse:
    """解析批量响应，仅保留失败项."""
    return _default_parser.parse_bulk_errors(status, body)


def parse_get(status: int, body: ResponseBody) -> GetResponse:
    """解析获取文档响应."""
    return _default_parser.parse_get(status, body)


def parse_document(status: int, body: ResponseBody) -> DocumentResponse:
    """解析单文档写入响应."""
    return _default_parser.parse_document(status, body)


def parse_command(status: int, body: ResponseBody) -> CommandResponse:
    """解析索引管理命令响应."""
    return _default_parser.parse_command(status, body)


def parse_ping(status: int, body: ResponseBody) -> PingResponse:
    """解析集群根接口响应."""
    return _default_parser.parse_ping(status, body)


def parse(family: ResponseFamily, status: int, body: ResponseBody) -> Any:
    """按操作族解析响应."""
    return _default_parser.parse(family, status, body)


def parse_api_response(response: ApiResponse[Any], family: ResponseFamily) -> Any:
    """解析 elasticsearch-py 返回的响应对象."""
    return _default_parser.parse_api_response(response, family)


def parse_api_error(error: ElasticsearchApiError, family: ResponseFamily) -> Any:
    """解析 elasticsearch-py 抛出的 ApiError."""
    return _default_parser.parse_api_error(error, family)
