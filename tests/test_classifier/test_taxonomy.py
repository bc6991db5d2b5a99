"""错误分类映射单元测试."""

import pytest

from elasticresponse.classifier import (
    ErrorKind,
    api_error_from_body,
    bulk_item_error,
    error_kind_for,
)


class TestErrorKindFor:
    """error_kind_for 测试."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, ErrorKind.BAD_REQUEST),
            (401, ErrorKind.UNAUTHORIZED),
            (403, ErrorKind.UNAUTHORIZED),
            (409, ErrorKind.VERSION_CONFLICT),
            (413, ErrorKind.REQUEST_TOO_LARGE),
            (429, ErrorKind.TOO_MANY_REQUESTS),
            (500, ErrorKind.SERVER_ERROR),
            (503, ErrorKind.SERVER_ERROR),
            (404, ErrorKind.UNKNOWN),
            (302, ErrorKind.UNKNOWN),
        ],
    )
    def test_status_only(self, status, expected):
        """测试仅根据状态码判定."""
        assert error_kind_for(status) is expected

    def test_error_type_refines_status(self):
        """测试 error.type 细化状态码判定."""
        assert error_kind_for(404, "index_not_found_exception") is ErrorKind.INDEX_NOT_FOUND
        assert error_kind_for(404, "document_missing_exception") is ErrorKind.DOCUMENT_NOT_FOUND
        assert error_kind_for(400, "resource_already_exists_exception") is ErrorKind.INDEX_ALREADY_EXISTS
        assert error_kind_for(500, "es_rejected_execution_exception") is ErrorKind.TOO_MANY_REQUESTS
        assert error_kind_for(403, "security_exception") is ErrorKind.UNAUTHORIZED

    def test_unknown_error_type_keeps_status_kind(self):
        """测试未知 error.type 保留状态码判定."""
        assert error_kind_for(500, "search_phase_execution_exception") is ErrorKind.SERVER_ERROR
        assert error_kind_for(400, "some_new_exception") is ErrorKind.BAD_REQUEST

    def test_missing_status(self):
        """测试缺少状态码."""
        assert error_kind_for(None) is ErrorKind.UNKNOWN
        assert error_kind_for(None, "version_conflict_engine_exception") is ErrorKind.VERSION_CONFLICT


class TestApiErrorFromBody:
    """api_error_from_body 测试."""

    def test_error_object(self):
        """测试 error 对象格式."""
        body = {
            "error": {
                "type": "mapper_parsing_exception",
                "reason": "failed to parse field [age]",
                "index": "users",
                "caused_by": {
                    "type": "number_format_exception",
                    "reason": "For input string: \"abc\"",
                },
            },
            "status": 400,
        }

        error = api_error_from_body(400, body)

        assert error.kind is ErrorKind.BAD_REQUEST
        assert error.status == 400
        assert error.error_type == "mapper_parsing_exception"
        assert error.reason == "failed to parse field [age]"
        assert error.index == "users"
        assert error.caused_by == 'number_format_exception: For input string: "abc"'
        assert error.raw is body

    def test_error_string(self):
        """测试早期版本的字符串 error."""
        error = api_error_from_body(500, {"error": "NullPointerException[null]", "status": 500})

        assert error.kind is ErrorKind.SERVER_ERROR
        assert error.reason == "NullPointerException[null]"
        assert error.error_type is None

    def test_missing_error_keeps_raw_message(self):
        """测试缺少 error 时保留原始内容."""
        error = api_error_from_body(502, {"message": "bad gateway"})

        assert error.kind is ErrorKind.SERVER_ERROR
        assert "bad gateway" in error.reason

    def test_empty_body(self):
        """测试空响应体."""
        error = api_error_from_body(500, None)

        assert error.kind is ErrorKind.SERVER_ERROR
        assert error.reason == "HTTP 500"

    def test_explicit_kind(self):
        """测试指定错误类型."""
        error = api_error_from_body(200, [1, 2], kind=ErrorKind.MALFORMED_RESPONSE)

        assert error.kind is ErrorKind.MALFORMED_RESPONSE
        assert error.reason == "[1, 2]"


class TestBulkItemError:
    """bulk_item_error 测试."""

    def test_successful_item(self):
        """测试成功项."""
        payload = {"_index": "users", "_id": "1", "status": 201, "result": "created"}

        assert bulk_item_error(payload) is None

    def test_item_with_error(self):
        """测试包含 error 的失败项."""
        payload = {
            "_index": "users",
            "_id": "1",
            "status": 409,
            "error": {
                "type": "version_conflict_engine_exception",
                "reason": "[1]: version conflict, document already exists",
            },
        }

        error = bulk_item_error(payload)

        assert error is not None
        assert error.kind is ErrorKind.VERSION_CONFLICT
        assert error.status == 409
        assert error.reason == "[1]: version conflict, document already exists"

    def test_item_without_result_or_error(self):
        """测试既没有 result 也没有 error 的单项."""
        error = bulk_item_error({"_index": "users", "_id": "1", "status": 200})

        assert error is not None
        assert error.kind is ErrorKind.ITEM_MALFORMED
        assert error.status == 200

    def test_delete_not_found(self):
        """测试删除不存在的文档."""
        payload = {"_index": "users", "_id": "9", "status": 404, "result": "not_found"}

        error = bulk_item_error(payload)

        assert error is not None
        assert error.kind is ErrorKind.DOCUMENT_NOT_FOUND
        assert error.reason == "not_found"

    def test_item_not_an_object(self):
        """测试非对象单项."""
        error = bulk_item_error("oops")

        assert error is not None
        assert error.kind is ErrorKind.ITEM_MALFORMED
        assert error.status is None

    def test_null_error_with_result(self):
        """测试 error 为 null 但包含 result 的单项视为成功."""
        payload = {"_index": "users", "_id": "1", "status": 201, "result": "created", "error": None}

        assert bulk_item_error(payload) is None
