# i18n_extractor/_i18n/builder.py
"""
从可翻译片段或可翻译属性构建 `Message`。

所有构建函数都返回 `MessageBuildResult`（`Message | I18nError`），
可恢复的错误以值的形式交给调用方，而不是以异常的形式抛出。
"""

from __future__ import annotations

from i18n_extractor.ast import Attribute, Element, ParseSourceSpan
from i18n_extractor.config import DEFAULT_MARKER_CONFIG, InterpolationConfig, MarkerConfig
from i18n_extractor.exceptions import ExpressionParseError
from i18n_extractor.interfaces import ExpressionParser
from i18n_extractor.types import I18nError, Message, MessageBuildResult, Part

from .stringify import stringify_interpolation, stringify_nodes

MARKER_SEPARATOR = "|"
INVALID_MARKER_VALUE = (
    "Invalid i18n marker value \"{value}\": expected 'meaning|description'."
)
MISSING_ATTRIBUTE = "Missing attribute '{name}'."


def split_marker_value(
    value: str | None, span: ParseSourceSpan
) -> tuple[str | None, str | None] | I18nError:
    """
    解析 `meaning|description` 形式的标记值，两半均可省略。

    - `None` 或空字符串 -> 含义与描述都不存在；
    - `含义` -> 只有含义；
    - `|描述` -> 只有描述；
    - 出现一个以上的 `|` 时视为格式错误。

    空的一半一律返回 None 而不是空字符串：`|描述` 的含义是 None。
    由于标识把 None 与 `""` 视为不同的含义，`|描述` 与不带标记值的同一正文
    得到相同的标识。
    """
    if not value:
        return None, None
    if value.count(MARKER_SEPARATOR) > 1:
        return I18nError(INVALID_MARKER_VALUE.format(value=value), span)
    meaning, _, description = value.partition(MARKER_SEPARATOR)
    return meaning or None, description or None


def _expression_error(e: ExpressionParseError, fallback: ParseSourceSpan) -> I18nError:
    span = ParseSourceSpan.at(e.location) if e.location is not None else fallback
    return I18nError(e.msg, span)


def message_from_part(
    part: Part,
    expression_parser: ExpressionParser,
    interpolation: InterpolationConfig,
) -> MessageBuildResult:
    span = part.source_span
    metadata = split_marker_value(part.i18n, span)
    if isinstance(metadata, I18nError):
        return metadata
    meaning, description = metadata

    try:
        stringified = stringify_nodes(part.content_nodes, expression_parser, interpolation)
    except ExpressionParseError as e:
        return _expression_error(e, span)

    return Message(
        content=stringified.content,
        meaning=meaning,
        description=description,
        source_span=span,
        placeholders=stringified.placeholders,
    )


def message_from_attribute(
    attr: Attribute,
    expression_parser: ExpressionParser,
    interpolation: InterpolationConfig,
    meaning: str | None = None,
    description: str | None = None,
) -> MessageBuildResult:
    try:
        stringified = stringify_interpolation(
            attr.value, attr.source_span.start, expression_parser, interpolation
        )
    except ExpressionParseError as e:
        return _expression_error(e, attr.source_span)

    return Message(
        content=stringified.content,
        meaning=meaning,
        description=description,
        source_span=attr.source_span,
        placeholders=stringified.placeholders,
    )


def message_from_i18n_attribute(
    element: Element,
    i18n_attr: Attribute,
    expression_parser: ExpressionParser,
    interpolation: InterpolationConfig,
    markers: MarkerConfig = DEFAULT_MARKER_CONFIG,
) -> MessageBuildResult:
    """
    处理 `i18n-title="含义|描述"` 这类显式属性标记：
    消息正文取自同一元素上的 `title` 属性，含义与描述取自标记值。
    """
    expected_name = i18n_attr.name[len(markers.attribute_prefix):]
    attr = element.get_attr(expected_name)
    if attr is None:
        return I18nError(MISSING_ATTRIBUTE.format(name=expected_name), element.source_span)

    metadata = split_marker_value(i18n_attr.value, i18n_attr.source_span)
    if isinstance(metadata, I18nError):
        return metadata
    meaning, description = metadata
    return message_from_attribute(
        attr, expression_parser, interpolation, meaning, description
    )
