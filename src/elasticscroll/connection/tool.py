"""ES 客户端工厂工具模块.

按集群角色惰性创建并缓存 Elasticsearch 客户端，并为 scroll 会话提供读客户端。

使用示例:
    from elasticscroll.connection import ESClientFactory, ClusterConfig, ClusterRole

    clusters = [
        ClusterConfig(hosts=["http://localhost:9200"]),
        ClusterConfig(hosts=["http://replica:9200"], role=ClusterRole.READ),
    ]

    with ESClientFactory(clusters) as factory:
        with factory.open_scroll() as session:
            session.init("logs-*", {"query": {"match_all": {}}})
            for hit in session.iter_hits():
                print(hit["_id"])
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from elasticscroll.scroll import ScrollConfig, ScrollSession

from .exceptions import ClusterNotFoundError, ConnectionConfigError
from .models import ClusterConfig, ClusterRole, ConnectionConfig

logger = logging.getLogger(__name__)


class ESClientFactory:
    """Elasticsearch 客户端工厂.

    Attributes:
        _clusters: 集群配置列表
        _connection_config: 请求与重试配置
        _clients: 按集群角色缓存的客户端字典
    """

    def __init__(
        self,
        clusters: list[ClusterConfig],
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        """初始化客户端工厂.

        Args:
            clusters: 集群配置列表，不可为空
            connection_config: 请求与重试配置，默认使用 ConnectionConfig 的默认值

        Raises:
            ConnectionConfigError: 当 clusters 为空时抛出
        """
        if not clusters:
            raise ConnectionConfigError("clusters 不能为空，请提供至少一个集群配置")
        self._clusters = clusters
        self._connection_config = connection_config or ConnectionConfig()
        self._clients: dict[ClusterRole, Elasticsearch] = {}

    def _create_client(self, cluster_config: ClusterConfig) -> Elasticsearch:
        """根据集群配置创建 Elasticsearch 客户端实例."""
        kwargs: dict[str, Any] = {
            "hosts": cluster_config.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
            "verify_certs": cluster_config.verify_certs,
        }

        if cluster_config.username and cluster_config.password:
            kwargs["basic_auth"] = (cluster_config.username, cluster_config.password)
        if cluster_config.api_key:
            kwargs["api_key"] = cluster_config.api_key
        if cluster_config.bearer_token:
            kwargs["bearer_auth"] = cluster_config.bearer_token
        if cluster_config.ca_certs:
            kwargs["ca_certs"] = cluster_config.ca_certs

        logger.info(
            f"创建 ES 客户端: role={cluster_config.role.value}, "
            f"hosts={cluster_config.hosts}"
        )
        return Elasticsearch(**kwargs)

    def get_client(self, role: ClusterRole | None = None) -> Elasticsearch:
        """获取指定角色的客户端.

        role 为 None 时优先返回 MASTER 客户端，不存在 MASTER 时返回第一个集群的客户端。

        Raises:
            ClusterNotFoundError: 当指定角色的集群不存在时抛出
        """
        if role is None:
            masters = [c for c in self._clusters if c.role == ClusterRole.MASTER]
            cluster = masters[0] if masters else self._clusters[0]
            role = cluster.role
        elif role not in self._clients:
            matched = [c for c in self._clusters if c.role == role]
            if not matched:
                raise ClusterNotFoundError(f"未找到角色为 {role.value} 的集群配置")
            cluster = matched[0]

        if role not in self._clients:
            self._clients[role] = self._create_client(cluster)
        return self._clients[role]

    def get_read_client(self) -> Elasticsearch:
        """获取读集群客户端，不存在 READ 集群时回退到默认客户端."""
        try:
            return self.get_client(ClusterRole.READ)
        except ClusterNotFoundError:
            return self.get_client()

    def open_scroll(self, config: ScrollConfig | None = None) -> ScrollSession:
        """在读客户端上创建 scroll 会话.

        Args:
            config: Scroll 配置

        Returns:
            新的 ScrollSession 实例
        """
        return ScrollSession(self.get_read_client(), config)

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ESClientFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭所有客户端."""
        self.close_all()

    def close_all(self) -> None:
        """关闭所有已创建的客户端并清空缓存."""
        for role, client in self._clients.items():
            try:
                client.close()
            except Exception as e:
                logger.warning(f"关闭 {role.value} 客户端失败: {e}")
        self._clients.clear()
