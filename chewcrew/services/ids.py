"""
chewcrew.services.ids
~~~~~~~~~~~~~~~~~~~~~

房间 ID / host ID 生成器。
"""
from __future__ import annotations

import secrets
import string
from collections.abc import Callable

_ALPHABET: str = string.ascii_letters + string.digits

# 生成器签名：传入长度，返回随机字符串。测试时可注入确定性实现。
IDGenerator = Callable[[int], str]


def generate_id(length: int) -> str:
    """生成指定长度的随机字母数字串。"""
    if length <= 0:
        raise ValueError(f"ID length must be positive, got {length}")
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
