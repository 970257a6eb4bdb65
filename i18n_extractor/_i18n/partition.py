# i18n_extractor/_i18n/partition.py
"""
将一组兄弟节点划分为连续的片段 (Part)。

分区之所以必要，是因为一对 i18n 注释可以把若干兄弟节点组合成一条消息，
所以不能简单地逐个节点处理。例如下面的兄弟节点会被划分为四个片段::

    <a>A</a>
    <b i18n>B</b>
    <!-- i18n -->
    <c>C</c>
    D
    <!-- /i18n -->
    E

1. 包含 `a` 的片段，不需要翻译；
2. 包含 `b` 的片段，需要翻译；
3. 包含 `c` 与文本 `D` 的片段，需要翻译；
4. 包含文本 `E` 的片段，不需要翻译。

所有片段的 `nodes` 依次拼接后与原兄弟列表完全一致：不丢失、不重复、不重排。
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence

from i18n_extractor.ast import Comment, Element, Node, Text
from i18n_extractor.config import DEFAULT_MARKER_CONFIG, MarkerConfig
from i18n_extractor.types import I18nError, ParseError, Part

MISSING_CLOSING_COMMENT = "Missing closing '{marker}' comment."
UNEXPECTED_CLOSING_COMMENT = "Unexpected closing '{marker}' comment."
NESTED_SECTION = "Could not start a translatable section inside a translatable section."


def is_opening_comment(node: Node, markers: MarkerConfig = DEFAULT_MARKER_CONFIG) -> bool:
    return isinstance(node, Comment) and node.value.startswith(markers.open_comment)


def is_closing_comment(node: Node, markers: MarkerConfig = DEFAULT_MARKER_CONFIG) -> bool:
    return isinstance(node, Comment) and node.value == markers.close_comment


def comment_marker_value(comment: Comment, markers: MarkerConfig) -> str:
    """取出开启注释中标记关键字之后的文本，例如 `i18n: 含义|描述` -> `含义|描述`。"""
    pattern = f"^{re.escape(markers.open_comment)}:?"
    return re.sub(pattern, "", comment.value, count=1).strip()


def partition(
    nodes: Sequence[Node],
    errors: list[ParseError],
    implicit_tags: Collection[str] = (),
    markers: MarkerConfig = DEFAULT_MARKER_CONFIG,
) -> list[Part]:
    """
    对兄弟节点进行分区。

    Args:
        nodes: 同一父节点下的有序兄弟节点。
        errors: 错误累加器；分区过程中发现的结构性错误会被追加到这里。
        implicit_tags: 无需显式标记即可翻译的标签名。
        markers: i18n 标记的命名。

    Returns:
        按原顺序排列的片段列表。
    """
    parts: list[Part] = []
    i = 0
    while i < len(nodes):
        node = nodes[i]

        if isinstance(node, Comment) and is_opening_comment(node, markers):
            children: list[Node] = []
            i += 1
            close_marker: Comment | None = None
            while i < len(nodes):
                current = nodes[i]
                if isinstance(current, Comment) and is_closing_comment(current, markers):
                    close_marker = current
                    break
                if is_opening_comment(current, markers):
                    errors.append(I18nError(NESTED_SECTION, current.source_span))
                children.append(current)
                i += 1
            if close_marker is None:
                errors.append(
                    I18nError(
                        MISSING_CLOSING_COMMENT.format(marker=markers.open_comment),
                        node.source_span,
                    )
                )
            parts.append(
                Part(
                    children=tuple(children),
                    is_translatable=True,
                    i18n=comment_marker_value(node, markers),
                    open_marker=node,
                    close_marker=close_marker,
                )
            )
        elif is_closing_comment(node, markers):
            errors.append(
                I18nError(
                    UNEXPECTED_CLOSING_COMMENT.format(marker=markers.open_comment),
                    node.source_span,
                )
            )
            parts.append(Part(children=(node,)))
        elif isinstance(node, Element):
            marker_attr = node.get_attr(markers.attribute)
            # 显式标记属性优先于隐式标签：二者同时存在时取属性值作为含义/描述
            if marker_attr is not None or node.name in implicit_tags:
                parts.append(
                    Part(
                        children=(node,),
                        is_translatable=True,
                        root_element=node,
                        i18n=marker_attr.value if marker_attr is not None else None,
                    )
                )
            else:
                parts.append(Part(children=(node,)))
        elif isinstance(node, (Text, Comment)):
            parts.append(Part(children=(node,)))
        else:
            raise TypeError(f"Unsupported node type: {type(node)!r}")
        i += 1

    return parts
