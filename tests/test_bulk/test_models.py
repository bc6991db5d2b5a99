"""批量响应模型单元测试."""

import unittest

from elasticresponse.bulk import (
    BulkAction,
    BulkErrorsResponse,
    BulkItemResult,
    BulkItemsFailedError,
    BulkResponse,
)
from elasticresponse.classifier import ErrorKind, OutcomeKind


def ok_item(action, doc_id, result, status=200, index="users"):
    return {
        action: {
            "_index": index,
            "_id": doc_id,
            "_version": 1,
            "result": result,
            "_shards": {"total": 2, "successful": 1, "failed": 0},
            "_seq_no": 5,
            "_primary_term": 1,
            "status": status,
        }
    }


def err_item(action, doc_id, status, error_type, reason, index="users"):
    return {
        action: {
            "_index": index,
            "_id": doc_id,
            "status": status,
            "error": {"type": error_type, "reason": reason, "index": index},
        }
    }


MIXED_BODY = {
    "took": 30,
    "errors": True,
    "items": [
        ok_item("index", "1", "created", 201),
        err_item("create", "2", 409, "version_conflict_engine_exception", "document already exists"),
        ok_item("update", "3", "updated"),
        {"delete": {"_index": "users", "_id": "4", "status": 200}},
        ok_item("delete", "5", "deleted"),
        err_item("index", "6", 400, "mapper_parsing_exception", "failed to parse field [age]"),
    ],
}


class TestBulkItemResult(unittest.TestCase):
    """BulkItemResult 单元测试."""

    def test_ok_item(self):
        """测试成功项."""
        item = BulkItemResult.from_dict(ok_item("index", "1", "created", 201))

        self.assertTrue(item.is_ok)
        self.assertEqual(item.action, BulkAction.INDEX)
        self.assertEqual(item.index, "users")
        self.assertEqual(item.doc_id, "1")
        self.assertEqual(item.status, 201)
        self.assertEqual(item.ok.result, "created")
        self.assertEqual(item.ok.version, 1)
        self.assertEqual(item.ok.seq_no, 5)
        self.assertEqual(item.ok.shards.successful, 1)
        self.assertIsNone(item.error)

    def test_error_item(self):
        """测试失败项."""
        item = BulkItemResult.from_dict(
            err_item("create", "2", 409, "version_conflict_engine_exception", "exists")
        )

        self.assertFalse(item.is_ok)
        self.assertEqual(item.action, BulkAction.CREATE)
        self.assertEqual(item.error.kind, ErrorKind.VERSION_CONFLICT)
        self.assertEqual(item.error.reason, "exists")
        self.assertEqual(item.error.error_type, "version_conflict_engine_exception")
        self.assertIsNone(item.ok)

    def test_item_without_result_or_error(self):
        """测试既没有 result 也没有 error 的单项."""
        item = BulkItemResult.from_dict({"update": {"_index": "users", "_id": "4", "status": 200}})

        self.assertFalse(item.is_ok)
        self.assertEqual(item.action, BulkAction.UPDATE)
        self.assertEqual(item.error.kind, ErrorKind.ITEM_MALFORMED)

    def test_unknown_action(self):
        """测试未知操作类型."""
        item = BulkItemResult.from_dict(
            {"upsert": {"_index": "users", "_id": "1", "status": 200, "result": "noop"}}
        )

        self.assertIsNone(item.action)
        self.assertEqual(item.error.kind, ErrorKind.ITEM_MALFORMED)

    def test_entry_with_several_actions(self):
        """测试单项包含多个操作."""
        item = BulkItemResult.from_dict({"index": {}, "delete": {}})

        self.assertIsNone(item.action)
        self.assertEqual(item.index, "")
        self.assertEqual(item.error.kind, ErrorKind.ITEM_MALFORMED)

    def test_delete_not_found(self):
        """测试删除不存在的文档."""
        item = BulkItemResult.from_dict(ok_item("delete", "9", "not_found", 404))

        self.assertFalse(item.is_ok)
        self.assertEqual(item.error.kind, ErrorKind.DOCUMENT_NOT_FOUND)


class TestBulkResponse(unittest.TestCase):
    """BulkResponse 单元测试."""

    def setUp(self):
        """设置测试环境."""
        self.response = BulkResponse.from_dict(MIXED_BODY)

    def test_items_in_original_order(self):
        """测试 items 保持原始顺序."""
        self.assertEqual(
            [item.doc_id for item in self.response.items()],
            ["1", "2", "3", "4", "5", "6"],
        )
        self.assertEqual(self.response.took, 30)
        self.assertTrue(self.response.errors)

    def test_partition(self):
        """测试成功 / 失败分区保持相对顺序."""
        self.assertEqual([item.doc_id for item in self.response.ok()], ["1", "3", "5"])
        self.assertEqual([item.doc_id for item in self.response.err()], ["2", "4", "6"])

    def test_partition_law(self):
        """测试分区可按原位置还原 items."""
        items = self.response.items()
        ok = list(self.response.ok())
        err = list(self.response.err())

        self.assertEqual(len(items), len(ok) + len(err))

        rebuilt = [ok.pop(0) if item.is_ok else err.pop(0) for item in items]

        self.assertEqual(tuple(rebuilt), items)
        self.assertEqual(ok, [])
        self.assertEqual(err, [])

    def test_malformed_item_kept_in_err(self):
        """测试结构不完整的单项进入失败分区而不是被丢弃."""
        malformed = self.response.err()[1]

        self.assertEqual(malformed.action, BulkAction.DELETE)
        self.assertEqual(malformed.error.kind, ErrorKind.ITEM_MALFORMED)

    def test_outcome_derived_from_items(self):
        """测试未传入分类结果时根据单项推导."""
        self.assertEqual(self.response.outcome.kind, OutcomeKind.PARTIAL_FAILURE)
        self.assertFalse(self.response.is_success())

    def test_all_items_failed(self):
        """测试全部失败仍返回完整模型."""
        body = {
            "took": 3,
            "errors": True,
            "items": [
                err_item("index", "1", 429, "es_rejected_execution_exception", "queue full"),
                err_item("index", "2", 429, "es_rejected_execution_exception", "queue full"),
            ],
        }

        response = BulkResponse.from_dict(body)

        self.assertEqual(len(response.ok()), 0)
        self.assertEqual(len(response.err()), 2)
        self.assertEqual(response.err()[0].error.kind, ErrorKind.TOO_MANY_REQUESTS)

    def test_count_by_result(self):
        """测试按 result 统计."""
        self.assertEqual(
            self.response.count_by_result(),
            {"created": 1, "updated": 1, "deleted": 1},
        )

    def test_error_summary(self):
        """测试错误摘要."""
        summary = self.response.get_error_summary(limit=2)

        self.assertIn("Total errors: 3", summary)
        self.assertIn("[create] Index: users, DocID: 2", summary)
        self.assertIn("... and 1 more errors", summary)

    def test_error_summary_without_errors(self):
        """测试没有错误时的摘要."""
        response = BulkResponse.from_dict({"took": 1, "errors": False, "items": [ok_item("index", "1", "created", 201)]})

        self.assertEqual(response.get_error_summary(), "No errors")
        response.raise_for_errors()

    def test_raise_for_errors(self):
        """测试存在失败项时抛出异常."""
        with self.assertRaises(BulkItemsFailedError) as ctx:
            self.response.raise_for_errors()

        self.assertIs(ctx.exception.response, self.response)
        self.assertIn("3 个失败项", str(ctx.exception))

    def test_iteration(self):
        """测试直接遍历."""
        self.assertEqual(len(self.response), 6)
        self.assertEqual(list(self.response), list(self.response.items()))


class TestBulkErrorsResponse(unittest.TestCase):
    """BulkErrorsResponse 单元测试."""

    def test_only_errors_kept(self):
        """测试仅保留失败项."""
        response = BulkErrorsResponse.from_response(BulkResponse.from_dict(MIXED_BODY))

        self.assertEqual(response.total, 6)
        self.assertEqual(response.ok_count, 3)
        self.assertEqual([item.doc_id for item in response], ["2", "4", "6"])
        self.assertEqual(len(response), 3)
        self.assertFalse(response.is_success())
        self.assertEqual(response.took, 30)


if __name__ == "__main__":
    unittest.main()
