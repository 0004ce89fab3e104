"""
chewcrew.core.logging
~~~~~~~~~~~~~~~~~~~~~

统一日志配置，根据环境自动设置日志级别和格式。

所有模块应通过 ``get_logger(__name__)`` 获取 logger 实例，
不要直接使用 ``print()`` 输出调试信息。

房主凭证通过 query string（``hostid=``）传递，uvicorn 的访问日志会原样
打印请求路径，因此 ``setup_logging()`` 会给访问日志挂上脱敏过滤器。
"""
from __future__ import annotations

import logging
import re
import sys

from chewcrew.core.config import settings

# 日志格式：时间 | 级别 | 模块名 | 消息
_LOG_FORMAT: str = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# 需要脱敏的 logger（uvicorn 访问日志包含完整 query string）
_REDACTED_LOGGERS: tuple[str, ...] = ("uvicorn.access",)

_HOST_ID_PATTERN = re.compile(r"(?<=[?&])(hostid=)[^&\s\"']*")


def mask_host_id(text: str) -> str:
    """将文本中 ``hostid=<值>`` 的值替换为 ``***``。"""
    return _HOST_ID_PATTERN.sub(r"\1***", text)


class HostIdRedactingFilter(logging.Filter):
    """在日志记录被格式化之前，抹掉消息和参数里的 host ID。"""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_host_id(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                mask_host_id(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def install_log_redaction() -> None:
    """给访问日志挂上 host ID 脱敏过滤器（重复调用不会重复添加）。"""
    for name in _REDACTED_LOGGERS:
        target = logging.getLogger(name)
        if not any(isinstance(f, HostIdRedactingFilter) for f in target.filters):
            target.addFilter(HostIdRedactingFilter())


def setup_logging() -> None:
    """根据当前环境配置全局日志。应在应用启动时调用一次。"""
    level = getattr(logging, settings.effective_log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        datefmt=_DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # 覆盖可能已有的 basicConfig
    )
    install_log_redaction()

    # 降低第三方库的日志噪音
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """获取指定模块的 logger 实例。"""
    return logging.getLogger(name)
