# tests/helpers/factories.py
"""
提供用于创建一致、可预测的 AST 测试数据的工厂函数。
单元测试可以直接构造节点树，而不必依赖真实的标记解析器。
"""

from __future__ import annotations

from i18n_extractor.ast import (
    Attribute,
    Comment,
    Element,
    Node,
    ParseLocation,
    ParseSourceSpan,
    Text,
)

TEST_SOURCE_URL = "test.html"


def span(line: int = 1, col: int = 0) -> ParseSourceSpan:
    """创建一个位于 `TEST_SOURCE_URL` 中指定位置的区间。"""
    return ParseSourceSpan.at(ParseLocation(TEST_SOURCE_URL, line=line, col=col))


def text(value: str, *, line: int = 1) -> Text:
    return Text(value=value, source_span=span(line))


def comment(value: str, *, line: int = 1) -> Comment:
    return Comment(value=value, source_span=span(line))


def element(
    name: str,
    *children: Node | str,
    attrs: dict[str, str] | None = None,
    line: int = 1,
) -> Element:
    """
    创建一个元素节点。

    子节点可以直接传入字符串，它们会被包装为 `Text` 节点；
    `attrs` 的插入顺序即为属性顺序。
    """
    element_span = span(line)
    return Element(
        name=name,
        attrs=tuple(
            Attribute(name=k, value=v, source_span=element_span)
            for k, v in (attrs or {}).items()
        ),
        children=tuple(
            text(child, line=line) if isinstance(child, str) else child
            for child in children
        ),
        source_span=element_span,
    )
