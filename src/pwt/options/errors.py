"""
定义选项容器使用的异常体系.

异常层级结构如下:
    - OptionsError: 所有异常的统一基类, 支持错误链追踪.
        - InvalidSeedError: 构造参数错误(非映射的初始数据, 或多余的参数).
        - InvalidKeyError: 无法归一化的键.
        - BlankOrMissingKeyError: 必需读取时, 键不存在或值为空.
        - UnknownKeyError: 严格模式下, 通过属性访问了不存在的键.
        - CredentialsConfigError: 凭据路径配置校验失败.

说明:
    - 构造类错误同时继承 TypeError, 键相关错误同时继承 KeyError,
      便于调用方沿用标准库的捕获习惯.
    - 普通的索引读取永远不会抛出键缺失异常, 缺失以 None 表示.
"""

from __future__ import annotations

from typing import Any, Hashable


class OptionsError(Exception):
    """
    所有选项容器异常的基类, 具备错误链追踪能力.

    参数:
    - `*args`: 异常消息内容;
    - `cause`: 可选的原始异常, 用于记录异常链(自动赋值给 `__cause__`).
    """

    def __init__(self, *args: Any, cause: Exception | None = None) -> None:
        super().__init__(*args)
        self.cause: Exception | None = cause
        self.__cause__ = cause


class InvalidSeedError(OptionsError, TypeError):
    """
    构造参数错误.

    说明:
    - 初始数据存在但不是映射类型;
    - 传入了容器不支持的额外位置参数.
    """


class InvalidKeyError(OptionsError, TypeError):
    """
    键无法归一化(既不是字符串, 也不是枚举成员).
    """

    def __init__(self, key: Any, *, cause: Exception | None = None) -> None:
        super().__init__(
            f"Unsupported key type {type(key).__name__}: {key!r}", cause=cause
        )
        self.key = key


class _KeyMessageError(OptionsError, KeyError):
    # KeyError 的 str() 会对消息加引号, 这里改为直接返回消息
    def __init__(self, key: Hashable, message: str) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class BlankOrMissingKeyError(_KeyMessageError):
    """
    必需读取失败: 键不存在, 或值为空(见 `pwt.options.blank.is_blank`).

    属性:
        key: 请求的(归一化后的)键.
    """

    def __init__(self, key: Hashable) -> None:
        super().__init__(key, f"{key!r} is blank")


class UnknownKeyError(_KeyMessageError):
    """
    严格模式(SafeOptions)下, 属性读取/写入/必需读取引用了存储中不存在的键.

    属性:
        key: 请求的(归一化后的)键.
    """

    def __init__(self, key: Hashable) -> None:
        super().__init__(key, f"{key!r} does not exist")


class CredentialsConfigError(OptionsError, ValueError):
    """
    凭据路径配置无效(根目录缺失或无法解析为路径等).

    属性:
        errors: 结构化的字段错误列表, 每项包含 field/message/type/input.
    """

    def __init__(
        self, errors: list[dict[str, Any]], *, cause: Exception | None = None
    ) -> None:
        fields = ", ".join(error["field"] for error in errors) or "<root>"
        super().__init__(f"Invalid credentials settings: {fields}", cause=cause)
        self.errors = errors
