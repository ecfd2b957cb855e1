"""ES 客户端工厂模块.

主要组件:
    - ESClientFactory: 客户端工厂，按角色缓存客户端并创建 scroll 会话
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 请求与重试配置模型
    - ClusterRole: 集群角色枚举
"""

from .exceptions import (
    ClusterNotFoundError,
    ConnectionConfigError,
    ESClientFactoryError,
)
from .models import ClusterConfig, ClusterRole, ConnectionConfig
from .tool import ESClientFactory

__all__ = [
    "ESClientFactory",
    "ClusterConfig",
    "ConnectionConfig",
    "ClusterRole",
    "ESClientFactoryError",
    "ConnectionConfigError",
    "ClusterNotFoundError",
]
