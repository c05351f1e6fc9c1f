"""
配置模型(LogConfig / CredentialsSettings)共用的 Pydantic 工具.

- BaseModelEx: 空值字段回退到默认值, 空值判定与选项容器共用 `is_blank`.
- convert: 把单值函数包装为 BeforeValidator, 失败时给出统一的错误类型.
- format_validation_error: 把 ValidationError 展开为可直接放进异常/日志的字典列表.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import (
    BaseModel,
    BeforeValidator,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError, PydanticUndefined

from pwt.options.blank import is_blank


def format_validation_error(exc: ValidationError) -> list[dict[str, Any]]:
    """
    展开 ValidationError.

    Returns:
        [{"field": "a.b", "message": ..., "type": ..., "input": ...}, ...]
    """
    result = []
    for error in exc.errors():
        loc = error.get("loc", ())
        result.append(
            {
                "field": ".".join(str(part) for part in loc),
                "message": error.get("msg"),
                "type": error.get("type"),
                "input": error.get("input"),
            }
        )
    return result


def convert(func: Callable[[Any], Any], description: str | None = None) -> BeforeValidator:
    """
    在类型校验前对字段值执行 `func`, None 原样放行.

    Args:
        func: 单值转换函数, 例如 `str.upper`.
        description: 转换失败时的错误信息, 默认使用异常文本.
    """

    def before(value: Any) -> Any:
        if value is None:
            return None
        try:
            return func(value)
        except Exception as ex:
            raise PydanticCustomError(
                "convert_failed", "{reason}", {"reason": description or str(ex)}
            )

    return BeforeValidator(before)


class BaseModelEx(BaseModel):
    """
    空值回退到默认值的 BaseModel.

    字段值为空(`is_blank`, 但 False 视为有效值)且字段定义了默认值或默认工厂时,
    使用默认值; 配置了 `validate_default` 时默认值也经过校验.
    """

    @field_validator("*", mode="wrap")
    @classmethod
    def use_default_value(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
        /,
    ) -> Any:
        if value is False or not is_blank(value) or not info.field_name:
            return handler(value)

        field_info = cls.model_fields.get(info.field_name)
        if field_info is None:
            return handler(value)
        default = field_info.get_default(call_default_factory=True)
        if default is PydanticUndefined:
            return handler(value)
        if info.config and info.config.get("validate_default"):
            return handler(default)
        return default
