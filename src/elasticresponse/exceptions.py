"""Elastic Response 异常定义模块."""


class ElasticResponseError(Exception):
    """Elastic Response 基础异常类."""

    pass


class ParserConfigError(ElasticResponseError):
    """解析器配置校验异常."""

    pass
