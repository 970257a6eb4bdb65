# i18n_extractor/markup_parser.py
"""
基于 BeautifulSoup 的默认标记解析器。

BeautifulSoup 本身非常宽容，不会报告标签配对问题；这里通过一个记录开闭标签的
`BeautifulSoup` 子类补上两类错误：多余的结束标签与未闭合的元素。
结束标签可省略的 HTML 元素（`li`、`p`、`td` 等）按 HTML 规则被隐式关闭，不算错误。
解析结果被转换为 `i18n_extractor.ast` 中的封闭节点类型。
"""

from __future__ import annotations

from typing import Any

import structlog
from bs4 import BeautifulSoup, CData, Comment as SoupComment, NavigableString, Tag
from bs4.builder import HTMLParserTreeBuilder
from bs4.builder._htmlparser import BeautifulSoupHTMLParser
from bs4.element import PageElement, PreformattedString

from i18n_extractor.ast import (
    Attribute,
    Comment,
    Element,
    Node,
    ParseLocation,
    ParseSourceSpan,
    Text,
)
from i18n_extractor.types import ParseError, ParseTreeResult

logger = structlog.get_logger(__name__)

_P_CLOSERS = frozenset(
    "address article aside blockquote details div dl fieldset figcaption figure "
    "footer form h1 h2 h3 h4 h5 h6 header hgroup hr main menu nav ol p pre "
    "section table ul".split()
)

# 结束标签可省略的元素 -> 会隐式关闭它的后续开始标签
IMPLICITLY_CLOSED_BY: dict[str, frozenset[str]] = {
    "p": _P_CLOSERS,
    "li": frozenset({"li"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "option": frozenset({"option", "optgroup"}),
    "optgroup": frozenset({"optgroup"}),
    "rt": frozenset({"rt", "rp"}),
    "rp": frozenset({"rt", "rp"}),
    "thead": frozenset({"tbody", "tfoot"}),
    "tbody": frozenset({"tbody", "tfoot"}),
    "tfoot": frozenset({"tbody"}),
    "tr": frozenset({"tr", "tbody", "tfoot"}),
    "td": frozenset({"td", "th", "tr", "tbody", "tfoot"}),
    "th": frozenset({"td", "th", "tr", "tbody", "tfoot"}),
    "colgroup": frozenset({"thead", "tbody", "tfoot", "tr"}),
    "head": frozenset({"body"}),
    "body": frozenset(),
    "html": frozenset(),
}


class _PositionedHTMLParser(BeautifulSoupHTMLParser):
    """在 html.parser 回调时记录文本与注释的起始位置。"""

    def handle_data(self, data: str) -> None:
        # 一段文本可能分多次回调（实体引用），只记录第一段的位置
        if not self.soup.current_data:
            self.soup.mark_string_start(self.getpos())
        super().handle_data(data)

    def handle_comment(self, data: str) -> None:
        self.soup.endData()
        self.soup.mark_string_start(self.getpos())
        super().handle_comment(data)


class _PositionedTreeBuilder(HTMLParserTreeBuilder):
    def feed(self, markup: Any) -> None:
        super().feed(markup, _parser_class=_PositionedHTMLParser)


class _TrackingSoup(BeautifulSoup):
    """在构建文档树的同时记录标签配对问题与字符串位置的 BeautifulSoup。"""

    def __init__(self, markup: str) -> None:
        # 必须在父类初始化之前准备好，因为解析发生在父类的 __init__ 中
        self.structure_errors: list[tuple[str, Tag | None]] = []
        self.string_positions: dict[int, tuple[int, int]] = {}
        self._open_elements: list[Tag] = []
        self._string_start: tuple[int, int] | None = None
        super().__init__(
            markup, builder=_PositionedTreeBuilder(multi_valued_attributes=None)
        )
        for tag in self._open_elements:
            if tag.name not in IMPLICITLY_CLOSED_BY:
                self.structure_errors.append((f"Unclosed element {tag.name}", tag))
        self._open_elements.clear()

    def mark_string_start(self, position: tuple[int, int]) -> None:
        self._string_start = position

    def endData(self, containerClass: Any = None) -> None:
        if not self.current_data:
            super().endData(containerClass)
            return
        start, self._string_start = self._string_start, None
        before = self._most_recent_element
        super().endData(containerClass)
        if start is not None and self._most_recent_element is not before:
            self.string_positions[id(self._most_recent_element)] = start

    def handle_starttag(self, name: str, *args: Any, **kwargs: Any) -> Tag | None:
        while (
            self._open_elements
            and name in IMPLICITLY_CLOSED_BY.get(self._open_elements[-1].name, ())
        ):
            closed = self._open_elements.pop()
            super().handle_endtag(closed.name)
        tag = super().handle_starttag(name, *args, **kwargs)
        if tag is not None:
            self._open_elements.append(tag)
        return tag

    def handle_endtag(self, name: str, nsprefix: str | None = None) -> None:
        if all(tag.name != name for tag in self._open_elements):
            innermost = self._open_elements[-1] if self._open_elements else None
            self.structure_errors.append((f'Unexpected closing tag "{name}"', innermost))
        else:
            while self._open_elements:
                tag = self._open_elements.pop()
                if tag.name == name:
                    break
                if tag.name not in IMPLICITLY_CLOSED_BY:
                    self.structure_errors.append((f"Unclosed element {tag.name}", tag))
        super().handle_endtag(name, nsprefix)


def _tag_location(tag: Tag | None, source_url: str) -> ParseLocation:
    if tag is None or tag.sourceline is None:
        return ParseLocation(source_url)
    return ParseLocation(source_url, line=tag.sourceline, col=tag.sourcepos or 0)


class SoupMarkupParser:
    """`MarkupParser` 协议的默认实现。"""

    def parse(
        self, source: str, source_url: str, keep_comments: bool = True
    ) -> ParseTreeResult:
        soup = _TrackingSoup(source)
        root_span = ParseSourceSpan.at(ParseLocation(source_url))
        root_nodes = self._convert_children(soup, soup, root_span, source_url, keep_comments)
        errors = tuple(
            ParseError(msg, ParseSourceSpan.at(_tag_location(tag, source_url)))
            for msg, tag in soup.structure_errors
        )
        logger.debug(
            "模板解析完成。",
            source_url=source_url,
            root_nodes=len(root_nodes),
            error_count=len(errors),
        )
        return ParseTreeResult(root_nodes=root_nodes, errors=errors)

    def _convert_children(
        self,
        soup: _TrackingSoup,
        parent: Tag,
        parent_span: ParseSourceSpan,
        source_url: str,
        keep_comments: bool,
    ) -> tuple[Node, ...]:
        nodes: list[Node] = []
        for child in parent.children:
            node = self._convert(soup, child, parent_span, source_url, keep_comments)
            if node is not None:
                nodes.append(node)
        return tuple(nodes)

    def _string_span(
        self,
        soup: _TrackingSoup,
        string: NavigableString,
        parent_span: ParseSourceSpan,
        source_url: str,
    ) -> ParseSourceSpan:
        position = soup.string_positions.get(id(string))
        if position is None:
            return parent_span
        line, col = position
        return ParseSourceSpan.at(ParseLocation(source_url, line=line, col=col))

    def _convert(
        self,
        soup: _TrackingSoup,
        child: PageElement,
        parent_span: ParseSourceSpan,
        source_url: str,
        keep_comments: bool,
    ) -> Node | None:
        if isinstance(child, SoupComment):
            if not keep_comments:
                return None
            return Comment(
                value=str(child).strip(),
                source_span=self._string_span(soup, child, parent_span, source_url),
            )
        if isinstance(child, CData):
            return Text(
                value=str(child),
                source_span=self._string_span(soup, child, parent_span, source_url),
            )
        if isinstance(child, PreformattedString):
            # Doctype、声明与处理指令不参与提取
            return None
        if isinstance(child, NavigableString):
            return Text(
                value=str(child),
                source_span=self._string_span(soup, child, parent_span, source_url),
            )
        if isinstance(child, Tag):
            span = ParseSourceSpan.at(_tag_location(child, source_url))
            attrs = tuple(
                Attribute(name=name, value=str(value), source_span=span)
                for name, value in child.attrs.items()
            )
            return Element(
                name=child.name,
                attrs=attrs,
                children=self._convert_children(
                    soup, child, span, source_url, keep_comments
                ),
                source_span=span,
            )
        raise TypeError(f"Unsupported document node: {type(child)!r}")
