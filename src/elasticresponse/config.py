"""解析器配置模型定义模块."""

from __future__ import annotations

import codecs
from dataclasses import dataclass

from .exceptions import ParserConfigError


@dataclass(frozen=True)
class ParserConfig:
    """解析器配置模型.

    Attributes:
        encoding: 字节响应体的字符编码，默认 utf-8
        not_found_as_empty: 可识别的 404 结构是否视为空结果，默认 True；
            为 False 时抛出对应的 IndexNotFoundError / DocumentNotFoundError
        raise_on_item_errors: 批量响应存在失败项时是否抛出 BulkItemsFailedError，默认 False

    Raises:
        ParserConfigError: 当编码无法识别时抛出

    Examples:
        >>> config = ParserConfig(not_found_as_empty=False, raise_on_item_errors=True)
        >>> parser = ResponseParser(config)
    """

    encoding: str = "utf-8"
    not_found_as_empty: bool = True
    raise_on_item_errors: bool = False

    def __post_init__(self) -> None:
        """校验配置参数合法性."""
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ParserConfigError(f"无法识别的编码: {self.encoding}") from e
