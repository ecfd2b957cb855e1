"""Scroll 响应解析异常定义模块."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import ElasticScrollError

if TYPE_CHECKING:
    from .types import ScrollFailureReason


class ScrollResponseError(ElasticScrollError):
    """Scroll 响应不可用异常.

    仅在调用方显式要求时抛出（raise_for_failure 或迭代批次），
    解析函数本身从不抛出。

    Attributes:
        reason: 校验失败原因，未知时为 None
    """

    def __init__(self, message: str, reason: ScrollFailureReason | None = None):
        super().__init__(message)
        self.reason = reason
