# i18n_extractor/config.py
"""
提取引擎的配置模型。

所有配置项都可以通过构造参数、环境变量（前缀 `I18N_`，嵌套字段用 `__`
分隔，例如 `I18N_INTERPOLATION__START`）或 `.env` 文件提供。
一次提取过程中，配置被视为不可变。
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InterpolationConfig(BaseModel):
    """插值表达式的起止定界符。"""

    model_config = ConfigDict(frozen=True)

    start: str = "{{"
    end: str = "}}"

    @model_validator(mode="after")
    def check_delimiters(self) -> "InterpolationConfig":
        if not self.start or not self.end:
            raise ValueError("插值定界符不能为空")
        if self.start == self.end:
            raise ValueError("插值的起始与结束定界符不能相同")
        return self


DEFAULT_INTERPOLATION_CONFIG = InterpolationConfig()


class MarkerConfig(BaseModel):
    """
    i18n 标记的命名。

    - `attribute`: 标记整个元素可翻译的属性名，如 `<p i18n="meaning|desc">`。
    - `attribute_prefix`: 标记单个属性可翻译的前缀，如 `i18n-title`。
    - 注释标记由 `attribute` 派生：`<!-- i18n -->` 开始，`<!-- /i18n -->` 结束。
    """

    model_config = ConfigDict(frozen=True)

    attribute: str = "i18n"
    attribute_prefix: str = "i18n-"

    @field_validator("attribute", "attribute_prefix")
    @classmethod
    def lower_and_strip(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("i18n 标记名不能为空")
        return v

    @model_validator(mode="after")
    def check_prefix(self) -> "MarkerConfig":
        if self.attribute.startswith(self.attribute_prefix):
            raise ValueError(
                f"标记属性 '{self.attribute}' 不能以属性前缀 '{self.attribute_prefix}' 开头"
            )
        return self

    @property
    def open_comment(self) -> str:
        return self.attribute

    @property
    def close_comment(self) -> str:
        return f"/{self.attribute}"


DEFAULT_MARKER_CONFIG = MarkerConfig()


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "console"] = "console"


class ExtractorConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="I18N_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    interpolation: InterpolationConfig = Field(default_factory=InterpolationConfig)
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    implicit_tags: list[str] = Field(
        default_factory=list, description="无需显式标记即可翻译的标签名"
    )
    implicit_attrs: dict[str, list[str]] = Field(
        default_factory=dict, description="标签名 -> 无需显式标记即可翻译的属性名"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("implicit_tags")
    @classmethod
    def lower_tags(cls, v: list[str]) -> list[str]:
        # html.parser 会把标签名统一转换为小写
        return [tag.strip().lower() for tag in v if tag.strip()]

    @field_validator("implicit_attrs")
    @classmethod
    def lower_attrs(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return {
            tag.strip().lower(): [name.strip().lower() for name in names]
            for tag, names in v.items()
        }
