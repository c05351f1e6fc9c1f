"""
日志工具.

主要组件:
- LoggerAdapter: 封装 `logging.Logger`, 合并适配器级别的 `extra` 字段.
- EnhancedFormatter: `{}` 风格的行格式, 附带异常信息.
- StandardHandler: WARNING 以下输出到 stdout, 其余输出到 stderr.
- LogConfig / configure_logger: 基于 Pydantic 的日志配置, 支持 rich 输出.

库内模块统一使用 `logger = get_logger_adapter(__name__)`, 导入时不配置任何处理器.
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated, Any, Literal

from rich.logging import RichHandler

from pwt.options.pydantic_utils import BaseModelEx, convert

OUTPUT_DEFAULT = "std"
OUTPUT_TYPE = Literal["std", "stdout", "stderr", "rich"]

TEXT_FORMAT_DEFAULT = "{asctime} {levelname} {name}: {message}"
DATE_FORMAT_DEFAULT = "%Y-%m-%d %H:%M:%S"

LEVEL_DEFAULT = "INFO"
LEVEL_TYPE = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def get_logger_adapter(name: str | None = None, **extra: Any) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name), **extra)


class StandardHandler(logging.Handler):
    """
    标准日志处理器, 用于将日志输出到标准输出流或标准错误流.
    """

    def flush(self) -> None:
        with self.lock:  # type: ignore
            sys.stdout.flush()
            sys.stderr.flush()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            stream = sys.stdout if record.levelno < logging.WARNING else sys.stderr
            stream.write(msg + "\n")
            stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        return f"<{type(self).__name__} <stdout> <stderr> ({level})>"


class EnhancedFormatter(logging.Formatter):
    """
    `{}` 风格的行格式, 异常信息追加在消息之后.
    """

    def __init__(
        self,
        textfmt: str | None = TEXT_FORMAT_DEFAULT,
        datefmt: str | None = DATE_FORMAT_DEFAULT,
    ) -> None:
        super().__init__(textfmt, datefmt, style="{")

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        record.asctime = self.formatTime(record, self.datefmt)
        text = self.formatMessage(record)
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


class LoggerAdapter:
    """
    日志适配器, 封装标准库 `logging.Logger`, 消息使用 `%` 占位符格式.

    通过构造函数传入的 `extra` 字段会自动合并到每条日志记录的 `extra` 中,
    调用时传入的 `extra` 优先.
    """

    def __init__(self, logger: logging.Logger, **extra: Any) -> None:
        self.logger = logger
        self.extra = extra

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        self.logger.log(level, msg, *args, **kwargs)


class LogConfig(BaseModelEx):
    """
    单个日志记录器的配置.

    - output: std / stdout / stderr / rich, 大小写不敏感.
    - level: 日志级别, 大小写不敏感.
    - 空值回退到默认值(见 BaseModelEx).
    """

    name: str | None = None
    level: Annotated[LEVEL_TYPE, convert(str.upper)] = LEVEL_DEFAULT
    output: Annotated[OUTPUT_TYPE, convert(str.lower)] = OUTPUT_DEFAULT
    text_format: str = TEXT_FORMAT_DEFAULT
    date_format: str = DATE_FORMAT_DEFAULT
    propagate: bool = False


def get_handler(config: LogConfig) -> logging.Handler:
    if config.output == "rich":
        handler: logging.Handler = RichHandler(
            show_path=False,
            markup=False,
            rich_tracebacks=False,
            log_time_format=config.date_format,
        )
        handler.setFormatter(EnhancedFormatter("{message}"))
        return handler

    if config.output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif config.output == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = StandardHandler()
    handler.setFormatter(EnhancedFormatter(config.text_format, config.date_format))
    return handler


def configure_logger(config: LogConfig | None = None, **fields: Any) -> logging.Logger:
    """
    按配置重置并设置日志记录器.

    参数:
        config: 日志配置, 省略时由 `fields` 构造.
        fields: LogConfig 的字段.

    返回:
        logging.Logger: 配置好的日志记录器.

    异常:
        pydantic.ValidationError: 配置无效.
    """
    if config is None:
        config = LogConfig(**fields)

    logger = logging.getLogger(config.name)
    logger.setLevel(config.level)
    logger.propagate = config.propagate
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.addHandler(get_handler(config))
    return logger
