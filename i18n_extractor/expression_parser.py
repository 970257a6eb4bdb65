# i18n_extractor/expression_parser.py
"""
默认的插值表达式解析器。

它只负责识别插值边界并对表达式做轻量的结构校验（空表达式、括号与引号配对、
嵌套插值），不理解表达式语法本身。
"""

from __future__ import annotations

import re
from functools import lru_cache

from i18n_extractor.ast import ParseLocation, ParseSourceSpan
from i18n_extractor.config import InterpolationConfig
from i18n_extractor.exceptions import ExpressionParseError
from i18n_extractor.types import Expression, SplitInterpolation

_QUOTES = frozenset("'\"`")
_CLOSING = {")": "(", "]": "[", "}": "{"}
_OPENING = {v: k for k, v in _CLOSING.items()}


@lru_cache(maxsize=16)
def _interpolation_pattern(start: str, end: str) -> re.Pattern[str]:
    # 非贪婪匹配：表达式在第一个结束定界符处终止
    return re.compile(f"{re.escape(start)}([\\s\\S]*?){re.escape(end)}")


def _check_expression(
    expression: str, location: ParseLocation, interpolation: InterpolationConfig
) -> None:
    if interpolation.start in expression:
        raise ExpressionParseError(
            f"Got interpolation ({interpolation.start}{interpolation.end}) "
            f"where expression was expected in [{expression}]",
            location,
        )

    stack: list[str] = []
    quote: str | None = None
    escaped = False
    for ch in expression:
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENING:
            stack.append(ch)
        elif ch in _CLOSING:
            if not stack or stack[-1] != _CLOSING[ch]:
                raise ExpressionParseError(
                    f"Unexpected token '{ch}' in [{expression}]", location
                )
            stack.pop()

    if quote is not None:
        raise ExpressionParseError(
            f"Unterminated quote in [{expression}]", location
        )
    if stack:
        raise ExpressionParseError(
            f"Missing expected {_OPENING[stack[-1]]} in [{expression}]", location
        )


class DefaultExpressionParser:
    """`ExpressionParser` 协议的默认实现。"""

    def split_interpolation(
        self,
        text: str,
        location: ParseLocation,
        interpolation: InterpolationConfig,
    ) -> SplitInterpolation | None:
        parts = _interpolation_pattern(interpolation.start, interpolation.end).split(text)
        if len(parts) <= 1:
            return None

        strings: list[str] = []
        expressions: list[Expression] = []
        span = ParseSourceSpan.at(location)
        for index, part in enumerate(parts):
            if index % 2 == 0:
                strings.append(part)
                continue
            if not part.strip():
                raise ExpressionParseError(
                    "Blank expressions are not allowed in interpolated strings",
                    location,
                )
            _check_expression(part, location, interpolation)
            expressions.append(Expression(source=part, source_span=span))

        return SplitInterpolation(strings=tuple(strings), expressions=tuple(expressions))
