# i18n_extractor/types.py
"""
本模块定义了提取引擎的核心数据类型。
这些类型是解析器、分区器、字符串化器、消息构建器与调用方之间的数据契约。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Union

from i18n_extractor._identity import message_identity
from i18n_extractor.ast import Comment, Element, Node, ParseSourceSpan, Text


@dataclass(frozen=True)
class ParseError:
    """一条诊断信息。追加到错误列表后，提取过程继续进行。"""

    msg: str
    span: ParseSourceSpan

    def __str__(self) -> str:
        return f"{self.msg}: {self.span.start}"


@dataclass(frozen=True)
class I18nError(ParseError):
    """i18n 特有的、可恢复的结构性错误（标记嵌套错误、缺失属性、非法插值等）。"""


@dataclass(frozen=True)
class Expression:
    """被表达式占位符替换掉的原始插值表达式源码。"""

    source: str
    source_span: ParseSourceSpan


PlaceholderTarget = Union[Element, Text, Expression]


@dataclass(frozen=True)
class Message:
    """
    一条提取出的可翻译消息。

    Attributes:
        content: 带占位符的规范化消息正文。
        meaning: 译者可见的含义，来自标记值 `meaning|description` 的前半部分。
        description: 译者可见的描述，来自标记值的后半部分。
        source_span: 消息在源模板中的位置，仅用于诊断。
        placeholders: 占位符名 -> 被替换的原始节点或表达式。
    """

    content: str
    meaning: str | None = None
    description: str | None = None
    source_span: ParseSourceSpan | None = field(default=None, compare=False)
    placeholders: Mapping[str, PlaceholderTarget] = field(
        default_factory=dict, compare=False, repr=False
    )

    @cached_property
    def identity(self) -> str:
        """由 `(content, meaning)` 决定的稳定标识，用于去重。"""
        return message_identity(self.content, self.meaning)


# 构建一条消息的结果：要么成功，要么是一个可恢复的 i18n 错误
MessageBuildResult = Union[Message, I18nError]


@dataclass(frozen=True)
class Part:
    """
    对一组兄弟节点进行分区后得到的连续片段。

    Attributes:
        children: 属于该片段的兄弟节点（不含 i18n 注释标记本身）。
        is_translatable: 该片段是否需要提取为消息。
        root_element: 当片段是单个被标记（显式或隐式）的元素时，指向该元素。
        i18n: 原始标记值（属性值或注释中标记关键字之后的文本）。
        open_marker: 开启该片段的 i18n 注释。
        close_marker: 关闭该片段的 i18n 注释；未闭合时为 None。
    """

    children: tuple[Node, ...]
    is_translatable: bool = False
    root_element: Element | None = None
    i18n: str | None = None
    open_marker: Comment | None = None
    close_marker: Comment | None = None

    @property
    def nodes(self) -> tuple[Node, ...]:
        """该片段在原兄弟列表中覆盖的全部节点，包括注释标记。"""
        head: tuple[Node, ...] = (self.open_marker,) if self.open_marker else ()
        tail: tuple[Node, ...] = (self.close_marker,) if self.close_marker else ()
        return head + self.children + tail

    @property
    def content_nodes(self) -> tuple[Node, ...]:
        """需要被字符串化的节点。"""
        if self.root_element is not None:
            return self.root_element.children
        return self.children

    @property
    def source_span(self) -> ParseSourceSpan:
        if self.root_element is not None:
            return self.root_element.source_span
        if self.children:
            return ParseSourceSpan(
                start=self.children[0].source_span.start,
                end=self.children[-1].source_span.end,
            )
        if self.open_marker is not None:
            return self.open_marker.source_span
        raise ValueError("空片段没有源码位置")


@dataclass(frozen=True)
class ParseTreeResult:
    """标记解析器的输出：根节点列表与解析错误。"""

    root_nodes: tuple[Node, ...]
    errors: tuple[ParseError, ...] = ()


@dataclass(frozen=True)
class SplitInterpolation:
    """
    按插值定界符切分后的文本。
    `strings` 总是比 `expressions` 多一个元素，二者交替组成原文本。
    """

    strings: tuple[str, ...]
    expressions: tuple[Expression, ...]


@dataclass(frozen=True)
class ExtractionResult:
    """从一个模板中提取出的所有消息与诊断信息。"""

    messages: list[Message]
    errors: list[ParseError]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
