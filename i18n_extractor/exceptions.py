# i18n_extractor/exceptions.py
"""
本模块定义了 i18n-extractor 项目中所有自定义的、语义化的异常类型。

注意：模板中的结构性问题（缺失的 i18n 注释、缺失的属性等）不是异常，
而是以 `ParseError` / `I18nError` 值的形式收集在 `ExtractionResult.errors` 中。
这里的异常只用于配置错误和外部协作者（表达式解析器）的失败信号。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from i18n_extractor.ast import ParseLocation


class ExtractorError(Exception):
    """
    所有 i18n-extractor 自定义异常的通用基类。
    捕获此异常可以处理所有源自本项目的预期错误。
    """


class ConfigurationError(ExtractorError):
    """
    表示在加载、解析或验证配置时发生的错误。
    例如，插值定界符为空，或者 i18n 属性前缀与标记属性冲突。
    """


class ExpressionParseError(ExtractorError):
    """
    表示插值表达式无法被解析。

    由表达式解析器抛出，由消息构建器捕获并转换为可恢复的 `I18nError`，
    因此它永远不会逃逸出 `MessageExtractor.extract`。
    """

    def __init__(self, msg: str, location: ParseLocation | None = None) -> None:
        self.msg = msg
        self.location = location
        super().__init__(msg if location is None else f"{msg}: {location}")
