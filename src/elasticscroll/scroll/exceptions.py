"""Scroll 会话异常定义模块."""

from ..exceptions import ElasticScrollError


class ScrollError(ElasticScrollError):
    """Scroll 会话基础异常类."""

    pass


class ScrollConfigError(ScrollError):
    """Scroll 配置校验异常.

    当 scroll_timeout 格式不合法、batch_size 小于 1 或索引为空时抛出。
    """

    pass


class ScrollNotInitializedError(ScrollError):
    """Scroll 未初始化异常."""

    pass


class ScrollRequestError(ScrollError):
    """Scroll 请求异常.

    包装 elasticsearch 客户端抛出的传输层或 API 异常。
    """

    pass
