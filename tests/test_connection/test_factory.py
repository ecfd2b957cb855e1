"""ESClientFactory 单元测试.

覆盖客户端创建、按角色缓存、认证参数、scroll 会话创建和生命周期管理。
"""

from unittest.mock import MagicMock, patch

import pytest

from elasticscroll.connection.exceptions import (
    ClusterNotFoundError,
    ConnectionConfigError,
)
from elasticscroll.connection.models import ClusterConfig, ClusterRole, ConnectionConfig
from elasticscroll.connection.tool import ESClientFactory
from elasticscroll.scroll import ScrollConfig, ScrollSession


@pytest.fixture
def master_cluster() -> ClusterConfig:
    """创建 MASTER 集群配置."""
    return ClusterConfig(hosts=["http://master:9200"], role=ClusterRole.MASTER)


@pytest.fixture
def read_cluster() -> ClusterConfig:
    """创建 READ 集群配置."""
    return ClusterConfig(hosts=["http://read:9200"], role=ClusterRole.READ)


ES_PATCH_PATH = "elasticscroll.connection.tool.Elasticsearch"


class TestESClientFactoryInit:
    """ESClientFactory 初始化测试."""

    def test_empty_clusters_raises_error(self) -> None:
        """测试空集群列表抛出 ConnectionConfigError."""
        with pytest.raises(ConnectionConfigError, match="clusters 不能为空"):
            ESClientFactory(clusters=[])

    def test_default_connection_config(self, master_cluster) -> None:
        """测试默认连接配置."""
        factory = ESClientFactory(clusters=[master_cluster])
        assert factory._connection_config == ConnectionConfig()

    @patch(ES_PATCH_PATH)
    def test_connection_config_passed_to_client(self, mock_es, master_cluster) -> None:
        """测试连接配置传递到 Elasticsearch 构造函数."""
        factory = ESClientFactory(
            clusters=[master_cluster],
            connection_config=ConnectionConfig(max_retries=5, request_timeout=60),
        )
        factory.get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["max_retries"] == 5
        assert call_kwargs["request_timeout"] == 60
        assert call_kwargs["retry_on_timeout"] is True
        assert call_kwargs["http_compress"] is True


class TestGetClient:
    """get_client 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_default_client_is_master(
        self, mock_es, master_cluster, read_cluster
    ) -> None:
        """测试默认获取 MASTER 客户端."""
        factory = ESClientFactory(clusters=[read_cluster, master_cluster])
        factory.get_client()
        mock_es.assert_called_once()
        assert mock_es.call_args[1]["hosts"] == ["http://master:9200"]

    @patch(ES_PATCH_PATH)
    def test_default_client_fallback_to_first(self, mock_es, read_cluster) -> None:
        """测试无 MASTER 时回退到第一个集群."""
        factory = ESClientFactory(clusters=[read_cluster])
        factory.get_client()
        assert mock_es.call_args[1]["hosts"] == ["http://read:9200"]

    @patch(ES_PATCH_PATH)
    def test_nonexistent_role_raises_error(self, mock_es, master_cluster) -> None:
        """测试不存在的角色抛出 ClusterNotFoundError."""
        factory = ESClientFactory(clusters=[master_cluster])
        with pytest.raises(ClusterNotFoundError, match="未找到角色为 read"):
            factory.get_client(ClusterRole.READ)

    @patch(ES_PATCH_PATH)
    def test_client_lazy_caching(self, mock_es, master_cluster) -> None:
        """测试客户端惰性缓存."""
        factory = ESClientFactory(clusters=[master_cluster])
        client1 = factory.get_client()
        client2 = factory.get_client(ClusterRole.MASTER)
        assert client1 is client2
        assert mock_es.call_count == 1

    @patch(ES_PATCH_PATH)
    def test_read_client_exists(self, mock_es, master_cluster, read_cluster) -> None:
        """测试有 READ 集群时返回 READ 客户端."""
        factory = ESClientFactory(clusters=[master_cluster, read_cluster])
        factory.get_read_client()
        assert mock_es.call_args[1]["hosts"] == ["http://read:9200"]

    @patch(ES_PATCH_PATH)
    def test_read_client_fallback(self, mock_es, master_cluster) -> None:
        """测试无 READ 集群时回退到默认客户端."""
        factory = ESClientFactory(clusters=[master_cluster])
        factory.get_read_client()
        assert mock_es.call_args[1]["hosts"] == ["http://master:9200"]


class TestAuthentication:
    """认证参数测试."""

    @patch(ES_PATCH_PATH)
    def test_basic_auth(self, mock_es) -> None:
        """测试 Basic Auth."""
        cluster = ClusterConfig(
            hosts=["http://localhost:9200"], username="elastic", password="changeme"
        )
        ESClientFactory(clusters=[cluster]).get_client()
        assert mock_es.call_args[1]["basic_auth"] == ("elastic", "changeme")

    @patch(ES_PATCH_PATH)
    def test_api_key_and_bearer(self, mock_es) -> None:
        """测试 API Key 和 Bearer Token."""
        cluster = ClusterConfig(
            hosts=["http://localhost:9200"],
            api_key=("id", "key"),
            bearer_token="token",
        )
        ESClientFactory(clusters=[cluster]).get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["api_key"] == ("id", "key")
        assert call_kwargs["bearer_auth"] == "token"

    @patch(ES_PATCH_PATH)
    def test_no_auth(self, mock_es) -> None:
        """测试无认证."""
        ESClientFactory(clusters=[ClusterConfig(hosts=["http://es:9200"])]).get_client()
        call_kwargs = mock_es.call_args[1]
        assert "basic_auth" not in call_kwargs
        assert "api_key" not in call_kwargs
        assert "bearer_auth" not in call_kwargs
        assert call_kwargs["verify_certs"] is True

    @patch(ES_PATCH_PATH)
    def test_ssl_config(self, mock_es) -> None:
        """测试 SSL 配置."""
        cluster = ClusterConfig(
            hosts=["https://localhost:9200"],
            ca_certs="/path/to/ca.crt",
            verify_certs=False,
        )
        ESClientFactory(clusters=[cluster]).get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["ca_certs"] == "/path/to/ca.crt"
        assert call_kwargs["verify_certs"] is False


class TestOpenScroll:
    """open_scroll 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_uses_read_client(self, mock_es, master_cluster, read_cluster) -> None:
        """测试 scroll 会话使用读客户端."""
        factory = ESClientFactory(clusters=[master_cluster, read_cluster])

        session = factory.open_scroll(ScrollConfig(scroll_timeout="5m"))

        assert isinstance(session, ScrollSession)
        assert session.es_client is factory.get_read_client()
        assert session.config.scroll_timeout == "5m"
        assert mock_es.call_args[1]["hosts"] == ["http://read:9200"]


class TestLifecycle:
    """生命周期管理测试."""

    @patch(ES_PATCH_PATH)
    def test_exit_closes_clients(self, mock_es, master_cluster) -> None:
        """测试上下文管理器退出时关闭客户端并清空缓存."""
        mock_client = MagicMock()
        mock_es.return_value = mock_client

        with ESClientFactory(clusters=[master_cluster]) as factory:
            factory.get_client()

        mock_client.close.assert_called_once()
        assert factory._clients == {}

    @patch(ES_PATCH_PATH)
    def test_close_error_does_not_stop_others(
        self, mock_es, master_cluster, read_cluster
    ) -> None:
        """测试单个客户端关闭失败时继续关闭其他客户端."""
        failing, healthy = MagicMock(), MagicMock()
        failing.close.side_effect = RuntimeError("boom")
        mock_es.side_effect = [failing, healthy]

        factory = ESClientFactory(clusters=[master_cluster, read_cluster])
        factory.get_client()
        factory.get_read_client()
        factory.close_all()

        healthy.close.assert_called_once()
        assert factory._clients == {}
