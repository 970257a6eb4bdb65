# i18n_extractor/_i18n/stringify.py
"""
把节点树转换为带占位符的扁平字符串。

规则（先序遍历）：
- 每个元素变为 `<ph name="eN">子节点</ph>`；
- 每个插值表达式变为自闭合的 `<ph name="k"/>`，k 使用独立的计数器；
- 含插值的文本节点额外包裹一层 `<ph name="tN">…</ph>`，以保留它在兄弟节点中的位置；
- 不含插值的文本按字面输出（HTML 转义）；注释被丢弃。

例如 `<a>A{{I}}</a><b>B</b>` 会被转换为::

    <ph name="e0"><ph name="t1">A<ph name="0"/></ph></ph><ph name="e2">B</ph>

两个计数器都从 0 开始，只在单次调用内有效，跨嵌套元素不重置。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from html import escape

from i18n_extractor.ast import Comment, Element, Node, ParseLocation, Text
from i18n_extractor.config import InterpolationConfig
from i18n_extractor.interfaces import ExpressionParser
from i18n_extractor.types import PlaceholderTarget


@dataclass(frozen=True)
class StringifiedContent:
    content: str
    placeholders: dict[str, PlaceholderTarget]


@dataclass
class _StringifyContext:
    expression_parser: ExpressionParser
    interpolation: InterpolationConfig
    # 元素与文本共用的计数器
    node_index: int = 0
    expression_index: int = 0
    placeholders: dict[str, PlaceholderTarget] = field(default_factory=dict)

    def take_node_index(self) -> int:
        index = self.node_index
        self.node_index += 1
        return index

    def add_expression(self, target: PlaceholderTarget) -> str:
        name = str(self.expression_index)
        self.expression_index += 1
        self.placeholders[name] = target
        return name


def _interpolate(text: str, location: ParseLocation, ctx: _StringifyContext) -> str | None:
    """替换文本中的插值表达式；文本不含插值时返回 None。"""
    split = ctx.expression_parser.split_interpolation(text, location, ctx.interpolation)
    if split is None:
        return None

    pieces: list[str] = []
    for i, literal in enumerate(split.strings):
        pieces.append(escape(literal, quote=False))
        if i < len(split.expressions):
            name = ctx.add_expression(split.expressions[i])
            pieces.append(f'<ph name="{name}"/>')
    return "".join(pieces)


def _visit(node: Node, ctx: _StringifyContext) -> str:
    if isinstance(node, Element):
        name = f"e{ctx.take_node_index()}"
        ctx.placeholders[name] = node
        body = "".join(_visit(child, ctx) for child in node.children)
        return f'<ph name="{name}">{body}</ph>'
    if isinstance(node, Text):
        index = ctx.take_node_index()
        interpolated = _interpolate(node.value, node.source_span.start, ctx)
        if interpolated is None:
            return escape(node.value, quote=False)
        name = f"t{index}"
        ctx.placeholders[name] = node
        return f'<ph name="{name}">{interpolated}</ph>'
    if isinstance(node, Comment):
        return ""
    raise TypeError(f"Unsupported node type: {type(node)!r}")


def stringify_nodes(
    nodes: Iterable[Node],
    expression_parser: ExpressionParser,
    interpolation: InterpolationConfig,
) -> StringifiedContent:
    """
    将一组节点转换为消息正文。

    Raises:
        ExpressionParseError: 当某个文本节点中的插值无法被解析时。
    """
    ctx = _StringifyContext(expression_parser, interpolation)
    content = "".join(_visit(node, ctx) for node in nodes)
    return StringifiedContent(content=content, placeholders=ctx.placeholders)


def stringify_interpolation(
    value: str,
    location: ParseLocation,
    expression_parser: ExpressionParser,
    interpolation: InterpolationConfig,
) -> StringifiedContent:
    """将属性值作为单段文本转换为消息正文，只可能出现表达式占位符。"""
    ctx = _StringifyContext(expression_parser, interpolation)
    interpolated = _interpolate(value, location, ctx)
    content = escape(value, quote=False) if interpolated is None else interpolated
    return StringifiedContent(content=content, placeholders=ctx.placeholders)
