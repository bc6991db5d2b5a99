"""Elastic Response 类型定义模块."""

from typing import IO, Any, Dict, List, Union

# JSON 对象类型
JsonDict = Dict[str, Any]

# 响应体输入类型
# 支持字节、字符串、可读流以及已解码的 JSON 值
ResponseBody = Union[bytes, bytearray, memoryview, str, IO[bytes], IO[str], JsonDict, List[Any], None]
