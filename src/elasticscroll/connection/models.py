"""ES 客户端工厂数据模型定义模块.

- ClusterRole: 集群角色枚举
- ClusterConfig: 集群地址与认证配置
- ConnectionConfig: 请求与重试配置
"""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConnectionConfigError


class ClusterRole(Enum):
    """集群角色枚举.

    Attributes:
        MASTER: 主集群，默认角色
        READ: 只读集群，scroll 优先使用
    """

    MASTER = "master"
    READ = "read"


@dataclass
class ClusterConfig:
    """集群配置模型.

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        role: 集群角色，默认 MASTER
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空时抛出
    """

    hosts: list[str] = field(default_factory=list)
    role: ClusterRole = ClusterRole.MASTER
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if (self.username is None) != (self.password is None):
            raise ConnectionConfigError("username 和 password 必须同时提供")


@dataclass
class ConnectionConfig:
    """请求与重试配置模型.

    重试由 elasticsearch 客户端负责，scroll 响应校验器本身不重试。

    Attributes:
        max_retries: 最大重试次数，默认 3
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: int = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
