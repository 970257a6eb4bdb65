# i18n_extractor/interfaces.py
"""
本模块使用 typing.Protocol 定义了提取引擎所依赖的外部协作者的接口协议。

提取引擎本身不关心 HTML 语法或表达式语法，只通过这两个协议与它们交互。
默认实现见 `i18n_extractor.markup_parser` 与 `i18n_extractor.expression_parser`。
"""

from __future__ import annotations

from typing import Protocol

from i18n_extractor.ast import ParseLocation
from i18n_extractor.config import InterpolationConfig
from i18n_extractor.types import ParseTreeResult, SplitInterpolation


class MarkupParser(Protocol):
    """将模板源码解析为节点森林，并报告其自身的语法错误。"""

    def parse(
        self, source: str, source_url: str, keep_comments: bool = True
    ) -> ParseTreeResult: ...


class ExpressionParser(Protocol):
    """在文本或属性值中识别并校验插值表达式。"""

    def split_interpolation(
        self,
        text: str,
        location: ParseLocation,
        interpolation: InterpolationConfig,
    ) -> SplitInterpolation | None:
        """
        按插值定界符切分文本。

        Returns:
            文本中不含插值时返回 None。

        Raises:
            ExpressionParseError: 当某个插值表达式无法被解析时。
        """
        ...
