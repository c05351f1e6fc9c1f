"""
空值判定工具.

"空"(blank)的定义:
- None
- False (注意: 0 不是空)
- 只包含空白字符的字符串(包括空字符串)
- 长度为 0 的容器(dict/list/tuple/set/bytes/Options 等任何 Sized 对象)

示例:
    >>> is_blank("  ")
    True
    >>> is_blank(0)
    False
    >>> presence([]) is None
    True
"""

from __future__ import annotations

from collections.abc import Sized
from typing import Any, TypeVar

T = TypeVar("T")


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_present(value: Any) -> bool:
    return not is_blank(value)


def presence(value: T) -> T | None:
    """
    值非空时返回值本身, 否则返回 None.
    """
    return None if is_blank(value) else value
