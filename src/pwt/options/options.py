"""
提供支持属性访问的有序选项容器.

设计目标:
- 键归一化: 字符串键统一为驻留(interned)的普通 str, 枚举成员取其 name;
  `opts["host"]`, `opts.host`, `opts[Key.host]` 指向同一条目.
- 保持插入顺序; 覆盖已有键不改变其位置.
- 索引读取永不因缺失而抛出异常, 缺失时返回 None.
- 属性访问(`opts.name` / `opts.name = value`)等价于 `get` / `set`;
  必需读取(`opts.require("name")` / `opts.required.name`)在值为空时抛出
  BlankOrMissingKeyError.
- 以下划线开头的属性名是普通实例属性, 不会成为键; 与方法同名的键需使用索引访问.

主要组件:
- Options: 基础容器, 只接受一个映射作为初始数据.
- OrderedOptions: 宽松构造的容器, 构造参数同 dict().
- InheritableOptions: 继承父容器的容器, 查找时先查自身, 未命中再查父容器.
- SafeOptions: 严格容器, 属性访问只允许已存在的键.

示例:
    >>> opts = Options(host="localhost")
    >>> opts.port = 8080
    >>> opts["host"], opts.port, opts.missing
    ('localhost', 8080, None)
    >>> opts.required.missing
    Traceback (most recent call last):
        ...
    pwt.options.errors.BlankOrMissingKeyError: 'missing' is blank

    >>> child = opts.inheritable_copy()
    >>> child.port = 9090
    >>> child.host, child.port, opts.port
    ('localhost', 9090, 8080)
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, MutableMapping, Sequence
from enum import Enum
from typing import Any, Iterator, KeysView

from pwt.options.blank import is_blank
from pwt.options.errors import (
    BlankOrMissingKeyError,
    InvalidKeyError,
    InvalidSeedError,
    UnknownKeyError,
)

_MISSING: Any = object()


def normalize_key(key: Any) -> str:
    """
    将键归一化为统一表示.

    Args:
        key: 字符串(含子类)或枚举成员.

    Returns:
        str: 驻留后的普通字符串.

    Raises:
        InvalidKeyError: 不支持的键类型.
    """
    if isinstance(key, Enum):
        key = key.name
    elif not isinstance(key, str):
        raise InvalidKeyError(key)
    return sys.intern(str(key))


def dig(value: Any, *path: Any) -> Any:
    """
    沿路径逐层取值, 路径元素原样使用(不做归一化).

    - 映射: 通过 `get` 取值; 若对象自带 `dig` 方法(如嵌套的 Options), 交给它继续处理.
    - 序列(str/bytes 除外): 按下标取值, 越界视为缺失.
    - 任意一层为 None, 键缺失或下标越界时返回 None.
    - 中间值是标量或字符串时不视为缺失, 而是类型错误(路径与数据结构不符).

    Raises:
        TypeError: 中间值既不是映射也不是序列.
    """
    for index, ident in enumerate(path):
        if value is None:
            return None
        nested_dig = getattr(value, "dig", None)
        if isinstance(value, Options) or (
            callable(nested_dig) and not isinstance(value, Mapping)
        ):
            return nested_dig(ident, *path[index + 1 :])
        if isinstance(value, Mapping):
            value = value.get(ident)
        elif isinstance(value, Sequence) and not isinstance(
            value, (str, bytes, bytearray)
        ):
            try:
                value = value[ident]
            except IndexError:
                return None
        else:
            raise TypeError(f"{type(value).__name__} does not support dig")
    return value


class _RequiredAccessor:
    """
    `opts.required.name` 形式的必需读取代理.
    """

    __slots__ = ("_options",)

    def __init__(self, options: Options) -> None:
        self._options = options

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._options.require(name)

    def __getitem__(self, key: Any) -> Any:
        return self._options.require(key)

    def __repr__(self) -> str:
        return f"<required {self._options!r}>"


class Options(MutableMapping[str, Any]):
    """
    支持属性访问的有序选项容器.

    内部结构:
    - self._data: {归一化键: 值}, 保持插入顺序.

    查找与更新逻辑:
    - 存储: 归一化键后写入, 已存在的键保持原位置.
    - 取值: 归一化键后查找, 未命中交给 `__missing__`(默认返回 None).
    - 属性: 读/写/必需读取前调用 `_guard`, 子类可借此限制属性访问.

    构造:
    - `Options()`: 空容器.
    - `Options(seed)`: 以映射 seed 初始化, 键在写入时归一化.
    - `Options(seed, **entries)` / `Options(**entries)`: 关键字参数在 seed 之后写入.
    - 其它形式(非映射 seed, 多余的位置参数)抛出 InvalidSeedError.

    注意:
    - 与方法或属性同名的键(`get`, `items`, `required` 等)只能通过索引访问;
      例如 `SafeOptions(required=1).required` 返回必需读取代理而不是值,
      也不会经过 `_guard` 检查, 应使用 `opts["required"]`.
    """

    _data: dict[str, Any]

    def __init__(
        self, seed: Mapping[Any, Any] | None = None, /, *args: Any, **entries: Any
    ) -> None:
        cls_name = type(self).__name__
        if args:
            raise InvalidSeedError(
                f"{cls_name}() accepts at most one seed mapping, "
                f"got {len(args) + 1} positional arguments"
            )
        if seed is not None and not isinstance(seed, Mapping):
            raise InvalidSeedError(
                f"{cls_name}() may only be initialized with a mapping, "
                f"got {type(seed).__name__}"
            )
        self._data = {}
        if seed is not None:
            self.update(seed)
        if entries:
            self.update(entries)

    # ===========================================================================

    def __getitem__(self, key: Any) -> Any:
        norm_key = normalize_key(key)
        try:
            return self._data[norm_key]
        except KeyError:
            return self.__missing__(norm_key)

    def __missing__(self, key: str) -> Any:
        return None

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[normalize_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        del self._data[normalize_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Any) -> bool:
        try:
            norm_key = normalize_key(key)
        except InvalidKeyError:
            return False
        return norm_key in self._data

    def __eq__(self, other: Any) -> bool:
        """
        比较有效内容(`to_dict()`), 与键的顺序无关;
        InheritableOptions 之间父子拆分不同但合并视图相同即相等.
        """
        if isinstance(other, Options):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{self.__class__.__name__}({{{inner}}})"

    def __copy__(self) -> Options:
        new = object.__new__(type(self))
        new.__dict__.update(self.__dict__)
        new._data = dict(self._data)
        return new

    # ===========================================================================

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        key = normalize_key(name)
        self._guard(key)
        return self[key]

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        key = normalize_key(name)
        self._guard(key)
        self[key] = value

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
            return
        try:
            del self[name]
        except KeyError as ex:
            raise AttributeError(name) from ex

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *(k for k in self._data if k.isidentifier())]

    def _guard(self, key: str) -> None:
        """
        属性访问前的检查钩子, 基础容器不做限制.
        """

    # ===========================================================================

    def get(self, key: Any, default: Any = None) -> Any:
        norm_key = normalize_key(key)
        if norm_key in self:
            return self[norm_key]
        return default

    def set(self, key: Any, value: Any) -> None:
        self[key] = value

    def require(self, key: Any) -> Any:
        """
        必需读取: 值存在且非空时返回.

        Raises:
            BlankOrMissingKeyError: 键不存在, 或值为空(见 `is_blank`).
            UnknownKeyError: 严格容器中键不存在.
        """
        norm_key = normalize_key(key)
        self._guard(norm_key)
        value = self[norm_key]
        if is_blank(value):
            raise BlankOrMissingKeyError(norm_key)
        return value

    @property
    def required(self) -> _RequiredAccessor:
        return _RequiredAccessor(self)

    def dig(self, key: Any, *path: Any) -> Any:
        """
        只归一化第一层的键, 其余路径原样向下查找, 任意一层缺失返回 None.
        """
        return dig(self[key], *path)

    def pop(self, key: Any, default: Any = _MISSING) -> Any:
        norm_key = normalize_key(key)
        if norm_key in self._data:
            return self._data.pop(norm_key)
        if default is _MISSING:
            raise KeyError(norm_key)
        return default

    def popitem(self) -> tuple[str, Any]:
        return self._data.popitem()

    def setdefault(self, key: Any, default: Any = None) -> Any:
        norm_key = normalize_key(key)
        if norm_key in self:
            return self[norm_key]
        self[norm_key] = default
        return default

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> Options:
        return self.__copy__()

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def extractable_options(self) -> bool:
        """
        标记此对象可作为参数列表末尾的选项被提取(见 `pwt.options.arguments`).
        """
        return True

    def inheritable_copy(self) -> InheritableOptions:
        return InheritableOptions(self)


class OrderedOptions(Options):
    """
    宽松构造的选项容器, 构造参数与 dict() 相同:

        OrderedOptions({"a": 1}, b=2)
        OrderedOptions([("a", 1), ("b", 2)])
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if len(args) > 1:
            raise InvalidSeedError(
                f"{type(self).__name__}() expected at most 1 positional argument, "
                f"got {len(args)}"
            )
        super().__init__()
        try:
            self.update(*args, **kwargs)
        except InvalidKeyError:
            raise
        except (TypeError, ValueError) as ex:
            raise InvalidSeedError(str(ex), cause=ex)


class InheritableOptions(OrderedOptions):
    """
    继承父映射的选项容器.

    - 查找: 先查自身存储, 未命中时在每次查找时委托父映射(父映射可以是另一个
      InheritableOptions, 由此形成从子到父的查找链).
    - 写入: 总是写入自身存储, 从不修改父映射.
    - 视图: 迭代/长度/相等比较/repr 均基于 `to_dict()` 的合并视图,
      即父映射的完整视图叠加自身条目(键冲突时自身优先).
    - 删除/弹出: 只作用于自身条目.
    """

    _parent: Mapping[Any, Any] | None

    def __init__(
        self, parent: Mapping[Any, Any] | None = None, /, *args: Any, **kwargs: Any
    ) -> None:
        if args or kwargs:
            raise InvalidSeedError(
                f"{type(self).__name__}() accepts only a parent mapping, "
                f"got {len(args)} extra positional and {len(kwargs)} keyword arguments"
            )
        if parent is not None and not isinstance(parent, Mapping):
            raise InvalidSeedError(
                f"{type(self).__name__}() parent must be a mapping, "
                f"got {type(parent).__name__}"
            )
        super().__init__()
        self._parent = parent

    def __missing__(self, key: str) -> Any:
        parent = self._parent
        if parent is None:
            return None
        if isinstance(parent, Options):
            return parent[key]
        return parent.get(key)

    def __contains__(self, key: Any) -> bool:
        try:
            norm_key = normalize_key(key)
        except InvalidKeyError:
            return False
        if norm_key in self._data:
            return True
        return self._parent is not None and norm_key in self._parent

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        parent = self._parent
        if parent is None:
            result: dict[Any, Any] = {}
        elif isinstance(parent, Options):
            result = parent.to_dict()
        else:
            result = dict(parent)
        result.update(self._data)
        return result

    def own_keys(self) -> KeysView[str]:
        return self._data.keys()

    def inheritable_copy(self) -> InheritableOptions:
        return type(self)(self)


class SafeOptions(Options):
    """
    严格选项容器: 属性读取/写入/必需读取只允许存储中已存在的键,
    否则抛出 UnknownKeyError. 索引访问(`[]`, `get`, `set`, `dig`)不受限制,
    可以写入新键, 写入后该键也可通过属性访问.

        >>> opts = SafeOptions(host="localhost")
        >>> opts["port"] = 3000
        >>> opts.port
        3000
        >>> opts.role
        Traceback (most recent call last):
            ...
        pwt.options.errors.UnknownKeyError: 'role' does not exist
    """

    def _guard(self, key: str) -> None:
        if key not in self._data:
            raise UnknownKeyError(key)
