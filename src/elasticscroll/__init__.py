"""elasticscroll - Elasticsearch Scroll 响应校验与批次读取工具.

主要功能:
    - parse_scroll_result: 校验 scroll 响应并提取 _scroll_id
    - ScrollSession: 按批次读取 scroll 搜索结果
    - ESClientFactory: 创建 Elasticsearch 客户端

使用示例:
    from elasticscroll import parse_scroll_result

    parsed = parse_scroll_result(response_text)
    if parsed:
        hits = parsed.hits
        next_scroll_id = parsed.scroll_id
"""

__version__ = "0.1.0"

# 导出客户端工厂
from elasticscroll.connection import (
    ClusterConfig,
    ClusterRole,
    ConnectionConfig,
    ESClientFactory,
)

# 导出异常
from elasticscroll.exceptions import ElasticScrollError

# 导出解析器
from elasticscroll.parsers import (
    JsonResult,
    ScrollFailureReason,
    ScrollParseResult,
    ScrollResponseError,
    check_scroll_document,
    parse_scroll_document,
    parse_scroll_result,
)

# 导出 scroll 会话
from elasticscroll.scroll import ScrollConfig, ScrollSession

__all__ = [
    # 版本
    "__version__",
    # 解析器
    "parse_scroll_result",
    "parse_scroll_document",
    "check_scroll_document",
    "JsonResult",
    "ScrollFailureReason",
    "ScrollParseResult",
    # scroll 会话
    "ScrollSession",
    "ScrollConfig",
    # 客户端工厂
    "ESClientFactory",
    "ClusterConfig",
    "ClusterRole",
    "ConnectionConfig",
    # 异常
    "ElasticScrollError",
    "ScrollResponseError",
]
