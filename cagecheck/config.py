# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("ValidatorSettings", "settings")


class ValidatorSettings(BaseSettings, frozen=True):
    """Validator defaults with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="CAGECHECK_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    MESSAGE_DELIMITER: str = Field(
        default=", ",
        description="Separator placed between rendered field messages",
    )
    CALLBACK_RULE_PREFIX: str = Field(
        default="callback",
        min_length=1,
        description="Prefix of the synthetic names given to callable rules",
    )

    _instance: ClassVar[Any] = None


settings = ValidatorSettings()
ValidatorSettings._instance = settings
