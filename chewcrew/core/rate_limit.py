"""
chewcrew.core.rate_limit
~~~~~~~~~~~~~~~~~~~~~~~~

HTTP 接口限流配置。
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from chewcrew.core.config import settings

# --------- HTTP 接口限流器 ---------
# 基于客户端 IP 地址进行限流，test 环境默认关闭
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=settings.rate_limit_enabled,
)
