"""Scroll 响应校验与批次读取使用示例.

本文件展示了如何校验原始 scroll 响应，以及如何使用 ScrollSession 按批次读取数据。
"""

import logging

from elasticscroll import (
    ClusterConfig,
    ESClientFactory,
    ScrollConfig,
    ScrollFailureReason,
    parse_scroll_result,
)

logging.basicConfig(level=logging.INFO)


# ==================== 示例1：校验原始响应 ====================
def example_parse_raw_response():
    """校验一段原始 scroll 响应文本."""
    raw = (
        '{"timed_out": false, "_shards": {"total": 1, "failed": 0},'
        ' "hits": {"hits": [{"_id": "1", "_source": {"msg": "hello"}}]},'
        ' "_scroll_id": "abc123"}'
    )

    parsed = parse_scroll_result(raw)
    if parsed:
        print(f"游标: {parsed.scroll_id}")
        for hit in parsed.hits:
            print(f"  文档 {hit['_id']}: {hit['_source']}")

    # 失败原因
    parsed = parse_scroll_result('{"_shards": {"failed": 2}}')
    if parsed.reason is ScrollFailureReason.SHARDS_FAILED:
        print("存在失败分片，丢弃该批次")


# ==================== 示例2：按批次读取 ====================
def example_scroll_session():
    """按批次读取全部匹配文档."""
    clusters = [ClusterConfig(hosts=["http://localhost:9200"])]

    with ESClientFactory(clusters) as factory:
        config = ScrollConfig(scroll_timeout="2m", batch_size=500)
        with factory.open_scroll(config) as session:
            session.init("logs-*", {"query": {"term": {"level": "error"}}})
            for batch in session.iter_batches():
                print(f"批次 {batch.scroll_id[:16]}...: {len(batch.hits)} 条")


def main():
    """运行所有示例."""
    print("1. 校验原始响应")
    print("-" * 50)
    example_parse_raw_response()

    print("\n2. 按批次读取")
    print("-" * 50)
    # 需要本地 Elasticsearch，取消注释以运行
    # example_scroll_session()


if __name__ == "__main__":
    main()
