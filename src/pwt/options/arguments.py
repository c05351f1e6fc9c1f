"""
从参数列表末尾提取选项映射.

约定:
- 末尾元素是普通 dict(精确类型, 不含子类), 或其 `extractable_options()` 返回真值时,
  视为可提取的选项.
- 无可提取选项时返回空 dict.

示例:
    >>> args = [1, 2, {"verbose": True}]
    >>> extract_options(args)
    {'verbose': True}
    >>> args
    [1, 2]
    >>> from pwt.options.options import Options
    >>> split_options((1, Options(a=1)))
    ((1,), Options({'a': 1}))
"""

from __future__ import annotations

from typing import Any, Mapping, MutableSequence, Sequence


def is_extractable(obj: Any) -> bool:
    if type(obj) is dict:
        return True
    marker = getattr(type(obj), "extractable_options", None)
    return callable(marker) and bool(obj.extractable_options())


def extract_options(args: MutableSequence[Any]) -> Mapping[Any, Any]:
    """
    若末尾元素可提取, 将其从列表中弹出并返回; 否则返回空 dict, 列表不变.
    """
    if args and is_extractable(args[-1]):
        return args.pop()
    return {}


def split_options(args: Sequence[Any]) -> tuple[tuple[Any, ...], Mapping[Any, Any]]:
    """
    `extract_options` 的非修改版本, 适用于 `*args` 元组.

    Returns:
        (去掉选项后的位置参数, 选项映射)
    """
    if args and is_extractable(args[-1]):
        return tuple(args[:-1]), args[-1]
    return tuple(args), {}
