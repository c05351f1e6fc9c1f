"""
加密凭据文件的路径解析.

给定根目录与环境名, 计算两个候选路径:
- 内容文件: `config/credentials/<env>.yml.enc`, 不存在时回退到 `config/credentials.yml.enc`
- 密钥文件: `config/credentials/<env>.key`, 不存在时回退到 `config/master.key`

首次读取后结果被缓存; 显式赋值会覆盖缓存, 并将对应的 `*_default` 标志置为 False.

示例:
    >>> config = CredentialsConfig("/srv/app", env="production")
    >>> config.content_path  # doctest: +SKIP
    PosixPath('/srv/app/config/credentials.yml.enc')
    >>> config.key_path = "/run/secrets/master.key"
    >>> config.key_path_default
    False
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

from pydantic import Field, ValidationError

from pwt.options import log
from pwt.options.errors import CredentialsConfigError
from pwt.options.pydantic_utils import BaseModelEx, convert, format_validation_error

logger = log.get_logger_adapter(__name__)

ENV_VARIABLE = "APP_ENV"
ENV_DEFAULT = "development"


def _default_env() -> str:
    return os.environ.get(ENV_VARIABLE) or ENV_DEFAULT


class CredentialsSettings(BaseModelEx):
    """
    凭据路径解析的输入.

    - root: 应用根目录.
    - env: 环境名, 为空时取环境变量 `APP_ENV`, 再为空时取 "development".
    """

    root: Path
    env: Annotated[str, convert(str.strip), Field(default_factory=_default_env)]


class CredentialsConfig:
    """
    凭据内容文件与密钥文件的路径配置.
    """

    def __init__(self, root: Path | str, env: str | None = None) -> None:
        try:
            self.settings = CredentialsSettings(root=root, env=env)
        except ValidationError as ex:
            errors = format_validation_error(ex)
            logger.warning("Credentials - invalid settings - %s", errors)
            raise CredentialsConfigError(errors, cause=ex)
        self._content_path: Path | None = None
        self._content_path_default = True
        self._key_path: Path | None = None
        self._key_path_default = True

    @property
    def root(self) -> Path:
        return self.settings.root

    @property
    def env(self) -> str:
        return self.settings.env

    @property
    def content_path(self) -> Path:
        if self._content_path is None:
            self._content_path = self._build_path(
                f"config/credentials/{self.env}.yml.enc", "config/credentials.yml.enc"
            )
        return self._content_path

    @content_path.setter
    def content_path(self, path: Path | str | None) -> None:
        self._content_path_default = False
        self._content_path = Path(path) if path is not None else None

    @property
    def content_path_default(self) -> bool:
        return self._content_path_default

    @property
    def key_path(self) -> Path:
        if self._key_path is None:
            self._key_path = self._build_path(
                f"config/credentials/{self.env}.key", "config/master.key"
            )
        return self._key_path

    @key_path.setter
    def key_path(self, path: Path | str | None) -> None:
        self._key_path_default = False
        self._key_path = Path(path) if path is not None else None

    @property
    def key_path_default(self) -> bool:
        return self._key_path_default

    def _build_path(self, primary: str, fallback: str) -> Path:
        path = self.root / primary
        if path.exists():
            logger.debug("Credentials - using %s", path)
            return path
        fallback_path = self.root / fallback
        logger.debug("Credentials - %s not found, using %s", path, fallback_path)
        return fallback_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={str(self.root)!r}, env={self.env!r})"
