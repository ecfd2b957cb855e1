"""ES 客户端工厂异常定义模块."""

from ..exceptions import ElasticScrollError


class ESClientFactoryError(ElasticScrollError):
    """客户端工厂基础异常类."""

    pass


class ConnectionConfigError(ESClientFactoryError):
    """连接配置校验异常.

    当 hosts 为空、request_timeout 小于 0 等配置不合法时抛出。
    """

    pass


class ClusterNotFoundError(ESClientFactoryError):
    """集群未找到异常."""

    pass
