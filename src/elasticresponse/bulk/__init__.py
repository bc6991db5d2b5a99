"""批量响应模块.

该模块将 ES 批量操作响应解析为结构化结果，包括：
- 按原始顺序解析每个单项的结果
- 依据单项自身的状态码和 error 字段判定成功或失败
- 保持顺序的成功 / 失败分区
- 仅保留失败项的精简响应

示例用法:
    >>> from elasticresponse import parse_bulk
    >>> response = parse_bulk(200, body)
    >>> print(f"成功: {len(response.ok())}, 失败: {len(response.err())}")
"""

from .models import (
    BulkAction,
    BulkErrorsResponse,
    BulkItemOk,
    BulkItemResult,
    BulkResponse,
)
from .exceptions import (
    BulkItemsFailedError,
    BulkResponseError,
)

__all__ = [
    "BulkAction",
    "BulkItemOk",
    "BulkItemResult",
    "BulkResponse",
    "BulkErrorsResponse",
    "BulkResponseError",
    "BulkItemsFailedError",
]
