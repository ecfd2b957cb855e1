"""
Scroll 响应解析数据类型定义.

包含失败原因枚举、解析文档持有者以及解析结果数据类.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from elasticscroll.parsers.exceptions import ScrollResponseError


class ScrollFailureReason(Enum):
    """Scroll 响应校验失败原因."""

    INVALID_JSON = "invalid_json"  # 非法 JSON 或顶层不是对象
    ERROR_REPORTED = "error_reported"  # 后端报告 error
    TIMED_OUT = "timed_out"  # 后端报告超时
    SHARDS_MISSING = "shards_missing"  # 缺少分片健康信息
    SHARDS_FAILED = "shards_failed"  # 存在失败分片
    HITS_MISSING = "hits_missing"  # 缺少 hits.hits 数组
    SCROLL_ID_MISSING = "scroll_id_missing"  # 缺少 _scroll_id


@dataclass
class JsonResult:
    """
    解析后的 JSON 文档持有者.

    校验成功时由调用方独占持有，调用方可直接遍历 document 读取命中结果，
    无需再次解析。校验失败时 usable 为 False，document 仅供排查，不可信任.

    Attributes:
        document: 解析得到的顶层对象，JSON 解析失败时为 None
        usable: 文档是否通过全部校验
    """

    document: dict[str, Any] | None = None
    usable: bool = False

    @property
    def hits(self) -> list[Any]:
        """
        获取命中数组 hits.hits.

        Raises:
            ScrollResponseError: 文档未通过校验时抛出
        """
        if not self.usable or self.document is None:
            raise ScrollResponseError("文档未通过校验，不可读取命中结果")
        return self.document["hits"]["hits"]


@dataclass
class ScrollParseResult:
    """
    Scroll 响应解析结果.

    布尔语义与校验结果一致，可直接用于 if 判断.

    Attributes:
        ok: 是否校验成功
        reason: 失败原因，成功时为 None
        result: 解析文档持有者
        scroll_id: 下一批次使用的游标，失败时为 None

    示例:
        parsed = parse_scroll_result(raw_body)
        if parsed:
            for hit in parsed.hits:
                print(hit["_id"])
            next_cursor = parsed.scroll_id
        else:
            print(f"响应不可用: {parsed.reason.value}")
    """

    ok: bool
    reason: ScrollFailureReason | None = None
    result: JsonResult = field(default_factory=JsonResult)
    scroll_id: str | None = None

    @classmethod
    def success(cls, document: dict[str, Any], scroll_id: str) -> ScrollParseResult:
        """构造成功结果."""
        return cls(
            ok=True,
            result=JsonResult(document=document, usable=True),
            scroll_id=scroll_id,
        )

    @classmethod
    def failure(
        cls,
        reason: ScrollFailureReason,
        document: dict[str, Any] | None = None,
    ) -> ScrollParseResult:
        """构造失败结果，文档被标记为不可用."""
        return cls(ok=False, reason=reason, result=JsonResult(document=document))

    def __bool__(self) -> bool:
        return self.ok

    def _failure_message(self) -> str:
        reason = self.reason.value if self.reason else "unknown"
        return f"Scroll 响应校验失败: {reason}"

    @property
    def document(self) -> dict[str, Any] | None:
        """成功时返回解析文档，失败时返回 None."""
        return self.result.document if self.ok else None

    @property
    def hits(self) -> list[Any]:
        """获取命中数组，失败时抛出 ScrollResponseError."""
        if not self.ok:
            raise ScrollResponseError(self._failure_message(), reason=self.reason)
        return self.result.hits

    def as_tuple(self) -> tuple[bool, dict[str, Any] | None, str | None]:
        """
        转换为 (是否成功, 文档, 游标) 三元组.

        失败时文档与游标均为 None.
        """
        return self.ok, self.document, self.scroll_id

    def raise_for_failure(self) -> ScrollParseResult:
        """
        校验失败时抛出异常.

        Returns:
            成功时返回自身，便于链式调用

        Raises:
            ScrollResponseError: 校验失败时抛出，携带失败原因
        """
        if not self.ok:
            raise ScrollResponseError(self._failure_message(), reason=self.reason)
        return self
