"""Scroll 会话模块.

按批次读取 Elasticsearch scroll 搜索结果，每个批次都经过响应校验。

主要组件:
    - ScrollSession: scroll 会话，负责打开、续取和清除 scroll
    - ScrollConfig: scroll 配置模型

使用示例:
    from elasticscroll.scroll import ScrollSession, ScrollConfig

    with ScrollSession(es_client, ScrollConfig(scroll_timeout="2m")) as session:
        session.init("logs-*", {"query": {"term": {"level": "error"}}})
        for hit in session.iter_hits():
            print(hit["_source"])
"""

from .exceptions import (
    ScrollConfigError,
    ScrollError,
    ScrollNotInitializedError,
    ScrollRequestError,
)
from .models import ScrollConfig
from .tool import ScrollSession

__all__ = [
    "ScrollSession",
    "ScrollConfig",
    "ScrollError",
    "ScrollConfigError",
    "ScrollNotInitializedError",
    "ScrollRequestError",
]
