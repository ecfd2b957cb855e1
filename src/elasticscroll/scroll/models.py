"""Scroll 会话数据模型定义模块."""

import re
from dataclasses import dataclass

from .exceptions import ScrollConfigError

# ES 时间单位格式，例如 30s、1m、2h
_TIME_VALUE_PATTERN = re.compile(r"^\d+(nanos|micros|ms|s|m|h|d)$")


@dataclass
class ScrollConfig:
    """Scroll 会话配置模型.

    Attributes:
        scroll_timeout: 搜索上下文保活时间，每次请求都会携带，默认 "1m"
        batch_size: 每批次文档数，搜索体未指定 size 时写入，默认 1000
        clear_on_exit: 退出上下文管理器时是否清除 scroll，默认 True

    Raises:
        ScrollConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ScrollConfig(scroll_timeout="5m", batch_size=500)
    """

    scroll_timeout: str = "1m"
    batch_size: int = 1000
    clear_on_exit: bool = True

    def __post_init__(self) -> None:
        """校验 scroll 配置参数合法性."""
        if not _TIME_VALUE_PATTERN.match(self.scroll_timeout):
            raise ScrollConfigError(
                f"scroll_timeout 格式不合法，当前值: {self.scroll_timeout!r}"
            )
        if self.batch_size < 1:
            raise ScrollConfigError(f"batch_size 必须 >= 1，当前值: {self.batch_size}")
