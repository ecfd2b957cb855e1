"""
Scroll 响应校验器.

校验 Elasticsearch scroll 响应是否为可用批次，并提取下一批次所需的 _scroll_id.

解析结果同时交给调用方，调用方直接遍历同一份文档读取命中结果，
避免为错误检测和数据读取各解析一次.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from elasticscroll.parsers.types import ScrollFailureReason, ScrollParseResult

RawResponse = str | bytes | bytearray


def _reject_constant(name: str) -> Any:
    # NaN / Infinity 不是合法 JSON
    raise ValueError(f"非法 JSON 常量: {name}")


def _is_false(value: Any) -> bool:
    return isinstance(value, bool) and not value


def _is_int(value: Any) -> bool:
    # bool 是 int 的子类，需要排除
    return isinstance(value, int) and not isinstance(value, bool)


def check_scroll_document(document: Any) -> ScrollFailureReason | None:
    """
    校验已解码的 scroll 响应.

    依次检查 error、timed_out、_shards.failed、hits.hits 和 _scroll_id，
    遇到第一个不满足的条件即返回对应原因.

    Args:
        document: 已解码的响应对象

    Returns:
        失败原因，全部通过时返回 None
    """
    if not isinstance(document, Mapping):
        return ScrollFailureReason.INVALID_JSON

    if "error" in document and not _is_false(document["error"]):
        return ScrollFailureReason.ERROR_REPORTED

    if "timed_out" in document and not _is_false(document["timed_out"]):
        return ScrollFailureReason.TIMED_OUT

    # 分片信息必须存在，缺失时不信任数据
    shards = document.get("_shards")
    if not isinstance(shards, Mapping):
        return ScrollFailureReason.SHARDS_MISSING
    failed = shards.get("failed")
    if not _is_int(failed):
        return ScrollFailureReason.SHARDS_MISSING
    if failed > 0:
        return ScrollFailureReason.SHARDS_FAILED

    hits = document.get("hits")
    if not isinstance(hits, Mapping) or not isinstance(hits.get("hits"), list):
        return ScrollFailureReason.HITS_MISSING

    scroll_id = document.get("_scroll_id")
    if not isinstance(scroll_id, str) or not scroll_id:
        return ScrollFailureReason.SCROLL_ID_MISSING

    return None


def parse_scroll_document(document: Any) -> ScrollParseResult:
    """
    校验已解码的 scroll 响应并封装为解析结果.

    适用于 elasticsearch 客户端已经反序列化的响应体.

    Args:
        document: 已解码的响应对象

    Returns:
        解析结果
    """
    reason = check_scroll_document(document)
    if reason is not None:
        if not isinstance(document, Mapping):
            return ScrollParseResult.failure(reason)
        return ScrollParseResult.failure(reason, dict(document))
    return ScrollParseResult.success(dict(document), document["_scroll_id"])


def parse_scroll_result(raw: RawResponse) -> ScrollParseResult:
    """
    解析并校验原始 scroll 响应.

    纯函数：不做 I/O，不记录日志，不保留状态，可并发调用.
    任何校验失败都只体现在返回值中，不抛出异常.

    Args:
        raw: 原始响应体（str 或 UTF-8 编码的 bytes）

    Returns:
        解析结果，成功时包含解析文档和 _scroll_id

    Raises:
        TypeError: raw 不是文本或字节串时抛出

    示例:
        parsed = parse_scroll_result(
            '{"_shards": {"failed": 0}, "hits": {"hits": []}, "_scroll_id": "abc"}'
        )
        assert parsed.ok and parsed.scroll_id == "abc"
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise TypeError(f"不支持的响应类型: {type(raw)}")

    try:
        document = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return ScrollParseResult.failure(ScrollFailureReason.INVALID_JSON)

    if not isinstance(document, dict):
        return ScrollParseResult.failure(ScrollFailureReason.INVALID_JSON)

    reason = check_scroll_document(document)
    if reason is not None:
        return ScrollParseResult.failure(reason, document)
    return ScrollParseResult.success(document, document["_scroll_id"])
