# i18n_extractor/ast.py
"""
模板抽象语法树 (AST) 的节点类型。

节点是一个封闭的联合类型 `Node = Element | Text | Comment`，全部为不可变的
dataclass。提取引擎只读取这些节点，从不修改它们；所有序列字段都使用 tuple。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ParseLocation:
    """源文件中的一个位置。`line` 从 1 开始，`col` 从 0 开始。"""

    source_url: str
    line: int = 1
    col: int = 0

    def __str__(self) -> str:
        return f"{self.source_url}@{self.line}:{self.col}"


@dataclass(frozen=True)
class ParseSourceSpan:
    """源文件中的一个区间。"""

    start: ParseLocation
    end: ParseLocation

    @classmethod
    def at(cls, location: ParseLocation) -> ParseSourceSpan:
        """构造一个起止位置相同的区间。"""
        return cls(start=location, end=location)

    def __str__(self) -> str:
        return str(self.start)


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str
    source_span: ParseSourceSpan


@dataclass(frozen=True)
class Text:
    value: str
    source_span: ParseSourceSpan


@dataclass(frozen=True)
class Comment:
    # 注释正文，已去除首尾空白
    value: str
    source_span: ParseSourceSpan


@dataclass(frozen=True)
class Element:
    name: str
    attrs: tuple[Attribute, ...] = ()
    children: tuple[Node, ...] = ()
    source_span: ParseSourceSpan = field(
        default_factory=lambda: ParseSourceSpan.at(ParseLocation(""))
    )

    def get_attr(self, name: str) -> Attribute | None:
        """按名称查找属性；同名属性只返回第一个。"""
        for attr in self.attrs:
            if attr.name == name:
                return attr
        return None


Node = Union[Element, Text, Comment]
