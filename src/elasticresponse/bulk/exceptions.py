"""批量响应异常定义模块."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import ElasticResponseError

if TYPE_CHECKING:
    from .models import BulkResponse


class BulkResponseError(ElasticResponseError):
    """批量响应基础异常类."""

    pass


class BulkItemsFailedError(BulkResponseError):
    """批量响应中存在失败项.

    仅在配置了 raise_on_item_errors 时抛出，携带完整解析后的响应，
    调用方仍可从 response.err() 获取失败项。

    Attributes:
        response: 完整的批量响应
    """

    def __init__(self, response: BulkResponse):
        super().__init__(
            f"批量操作中有 {len(response.err())} 个失败项: "
            f"{response.get_error_summary()}"
        )
        self.response = response
