"""Scroll 响应解析模块.

提供 scroll 响应的校验与游标提取功能.
"""

from elasticscroll.parsers.exceptions import ScrollResponseError
from elasticscroll.parsers.scroll import (
    check_scroll_document,
    parse_scroll_document,
    parse_scroll_result,
)
from elasticscroll.parsers.types import (
    JsonResult,
    ScrollFailureReason,
    ScrollParseResult,
)

__all__ = [
    "parse_scroll_result",
    "parse_scroll_document",
    "check_scroll_document",
    "JsonResult",
    "ScrollFailureReason",
    "ScrollParseResult",
    "ScrollResponseError",
]
