"""Scroll 会话核心工具类."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError, NotFoundError, TransportError

from elasticscroll.parsers import (
    ScrollParseResult,
    parse_scroll_document,
    parse_scroll_result,
)

from .exceptions import ScrollConfigError, ScrollNotInitializedError, ScrollRequestError
from .models import ScrollConfig

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"accept": "application/json", "content-type": "application/json"}


class ScrollSession:
    """Scroll 会话.

    持有一个 scroll 游标，按批次读取搜索结果，每个批次的响应都经过
    scroll 响应校验器校验后才会更新游标。

    会话是有状态的，不是线程安全的，每个消费者使用独立会话。

    Args:
        es_client: Elasticsearch 客户端实例
        config: Scroll 配置，默认使用 ScrollConfig 的默认值

    Examples:
        >>> with ScrollSession(es_client) as session:
        ...     session.init("logs-*", {"query": {"match_all": {}}})
        ...     for hit in session.iter_hits():
        ...         print(hit["_id"])
    """

    def __init__(
        self,
        es_client: Elasticsearch,
        config: ScrollConfig | None = None,
    ) -> None:
        self.es_client = es_client
        self.config = config or ScrollConfig()
        self._index: str | None = None
        self._index_label: str | None = None
        self._search_body: dict[str, Any] | None = None
        self._scroll_id: str | None = None
        # 校验失败响应中携带的游标，只用于清除，不用于续取
        self._stale_scroll_ids: list[str] = []
        logger.info(
            f"初始化 scroll 会话: scroll_timeout={self.config.scroll_timeout}, "
            f"batch_size={self.config.batch_size}"
        )

    @property
    def scroll_id(self) -> str | None:
        """当前游标，尚未打开或已清除时为 None."""
        return self._scroll_id

    def init(
        self,
        index: str | list[str],
        search_body: Mapping[str, Any] | None = None,
    ) -> ScrollSession:
        """初始化 scroll 目标.

        已打开的 scroll 会先被清除，因此同一会话可重复使用。
        首个批次在第一次调用 next() 时才会请求。

        Args:
            index: 索引名称或索引名称列表（支持通配符）
            search_body: 搜索请求体，未指定 size 时使用 batch_size

        Returns:
            会话自身（支持链式调用）

        Raises:
            ScrollConfigError: 当索引为空时抛出
        """
        names = self._validate_index(index)
        body = dict(search_body or {})
        body.setdefault("size", self.config.batch_size)

        self.clear()

        self._index = ",".join(quote(name, safe=",*") for name in names)
        self._index_label = ",".join(names)
        self._search_body = body
        return self

    def next(self) -> ScrollParseResult:
        """获取下一批次.

        首次调用时发起带 scroll 参数的搜索，之后使用当前游标继续。
        校验成功时更新游标；校验失败时保留原游标并返回失败结果，调用方可重试。

        Returns:
            当前批次的解析结果

        Raises:
            ScrollNotInitializedError: 未调用 init() 时抛出
            ScrollRequestError: 请求失败时抛出
        """
        if self._index is None:
            raise ScrollNotInitializedError("scroll 未初始化，请先调用 init()")

        try:
            if self._scroll_id is None:
                response = self.es_client.perform_request(
                    "POST",
                    f"/{self._index}/_search",
                    params={"scroll": self.config.scroll_timeout},
                    headers=_JSON_HEADERS,
                    body=self._search_body,
                )
            else:
                response = self.es_client.scroll(
                    scroll_id=self._scroll_id,
                    scroll=self.config.scroll_timeout,
                )
        except (ApiError, TransportError) as e:
            raise ScrollRequestError(f"scroll 请求失败: {str(e)}") from e

        parsed = self._parse_response(response)
        if parsed:
            self._scroll_id = parsed.scroll_id
        else:
            self._remember_stale_scroll_id(parsed)
            logger.warning(
                f"scroll 响应不可用: 索引 '{self._index_label}', "
                f"原因: {parsed.reason.value}"
            )
        return parsed

    def clear(self) -> None:
        """清除当前 scroll 上下文.

        同时清除校验失败响应中遗留的游标。没有游标时不发起请求。
        scroll 已过期（404）时仅记录日志。无论请求是否成功，游标都会被丢弃。

        Raises:
            ScrollRequestError: 除 404 以外的请求失败时抛出
        """
        scroll_ids = list(self._stale_scroll_ids)
        if self._scroll_id is not None:
            scroll_ids.append(self._scroll_id)
        if not scroll_ids:
            return

        self._scroll_id = None
        self._stale_scroll_ids = []
        try:
            self.es_client.clear_scroll(
                scroll_id=scroll_ids[0] if len(scroll_ids) == 1 else scroll_ids
            )
            logger.info("scroll 已清除")
        except NotFoundError:
            logger.info("scroll 已过期，无需清除")
        except (ApiError, TransportError) as e:
            raise ScrollRequestError(f"清除 scroll 失败: {str(e)}") from e

    def iter_batches(self) -> Iterator[ScrollParseResult]:
        """逐批次迭代，直到返回空批次.

        Yields:
            每个非空批次的解析结果

        Raises:
            ScrollResponseError: 批次响应校验失败时抛出
        """
        batch_count = 0
        while True:
            parsed = self.next().raise_for_failure()
            if not parsed.hits:
                break
            batch_count += 1
            logger.debug(f"批次 {batch_count}: {len(parsed.hits)} 条命中")
            yield parsed
        logger.info(f"scroll 完成，共 {batch_count} 个批次")

    def iter_hits(self) -> Iterator[Any]:
        """逐条迭代命中结果，命中内容原样返回."""
        for parsed in self.iter_batches():
            yield from parsed.hits

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ScrollSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，按配置清除 scroll."""
        if self.config.clear_on_exit:
            self.clear()

    # ============================================================
    # 内部辅助方法
    # ============================================================

    @staticmethod
    def _validate_index(index: str | list[str]) -> list[str]:
        names = [index] if isinstance(index, str) else list(index)
        if not names or not all(isinstance(n, str) and n for n in names):
            raise ScrollConfigError("index 不能为空，请提供至少一个索引名称")
        return names

    def _remember_stale_scroll_id(self, parsed: ScrollParseResult) -> None:
        """记录失败响应中的游标，供 clear() 释放服务端上下文."""
        document = parsed.result.document
        if document is None:
            return
        scroll_id = document.get("_scroll_id")
        if not isinstance(scroll_id, str) or not scroll_id:
            return
        if scroll_id != self._scroll_id and scroll_id not in self._stale_scroll_ids:
            self._stale_scroll_ids.append(scroll_id)

    @staticmethod
    def _parse_response(response: Any) -> ScrollParseResult:
        """校验响应.

        支持 elasticsearch ApiResponse 对象、已解码的字典和原始响应文本。
        """
        body = getattr(response, "body", response)
        if isinstance(body, (str, bytes, bytearray)):
            return parse_scroll_result(body)
        return parse_scroll_document(body)
