"""elasticscroll 异常定义模块."""


class ElasticScrollError(Exception):
    """elasticscroll 基础异常类."""

    pass
