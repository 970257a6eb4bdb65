# tests/unit/_i18n/test_partition.py
"""测试兄弟节点分区逻辑。"""

from __future__ import annotations

import pytest

from i18n_extractor._i18n.partition import partition
from i18n_extractor.config import MarkerConfig
from i18n_extractor.types import I18nError, ParseError
from tests.helpers.factories import comment, element, text


def _flatten(parts) -> list:
    return [node for part in parts for node in part.nodes]


def test_marker_attribute_and_plain_element():
    """`<a>A</a><b i18n>B</b>` 被划分为两个片段，只有第二个可翻译。"""
    a = element("a", "A")
    b = element("b", "B", attrs={"i18n": ""})
    errors: list[ParseError] = []

    parts = partition([a, b], errors)

    assert len(parts) == 2
    assert not parts[0].is_translatable
    assert parts[0].root_element is None
    assert parts[1].is_translatable
    assert parts[1].root_element is b
    assert parts[1].content_nodes == b.children
    assert errors == []


def test_comment_markers_group_siblings():
    """注释标记之间的节点组成一个可翻译片段，标记本身不计入 children。"""
    open_marker = comment("i18n")
    c = element("c", "C")
    d = text("D")
    close_marker = comment("/i18n")
    e = text("E")
    errors: list[ParseError] = []

    parts = partition([open_marker, c, d, close_marker, e], errors)

    assert len(parts) == 2
    assert parts[0].is_translatable
    assert parts[0].children == (c, d)
    assert parts[0].open_marker is open_marker
    assert parts[0].close_marker is close_marker
    assert not parts[1].is_translatable
    assert parts[1].children == (e,)
    assert errors == []


def test_comment_marker_value_is_kept():
    parts = partition([comment("i18n: 问候|首页顶部"), text("Hi"), comment("/i18n")], [])
    assert parts[0].i18n == "问候|首页顶部"


def test_unterminated_marker_keeps_remaining_nodes():
    """未闭合的开启注释会产生一个错误，但剩余节点仍属于可翻译片段。"""
    open_marker = comment("i18n", line=3)
    nodes = [text("before"), open_marker, element("p", "x"), text("tail")]
    errors: list[ParseError] = []

    parts = partition(nodes, errors)

    assert len(errors) == 1
    assert isinstance(errors[0], I18nError)
    assert errors[0].msg == "Missing closing 'i18n' comment."
    assert errors[0].span == open_marker.source_span
    assert parts[-1].is_translatable
    assert parts[-1].children == tuple(nodes[2:])
    assert parts[-1].close_marker is None


def test_unmatched_closing_marker_is_ordinary_node():
    close_marker = comment("/i18n")
    errors: list[ParseError] = []

    parts = partition([text("A"), close_marker, text("B")], errors)

    assert [p.is_translatable for p in parts] == [False, False, False]
    assert parts[1].children == (close_marker,)
    assert [e.msg for e in errors] == ["Unexpected closing 'i18n' comment."]


def test_nested_opening_marker_is_reported():
    nested = comment("i18n")
    errors: list[ParseError] = []

    parts = partition([comment("i18n"), nested, text("x"), comment("/i18n")], errors)

    assert len(parts) == 1
    assert nested in parts[0].children
    assert [e.msg for e in errors] == [
        "Could not start a translatable section inside a translatable section."
    ]


def test_implicit_tag_is_translatable():
    title = element("title", "Home")
    parts = partition([title], [], implicit_tags={"title"})
    assert parts[0].is_translatable
    assert parts[0].root_element is title
    assert parts[0].i18n is None


def test_marker_attribute_wins_over_implicit_tag():
    title = element("title", "Home", attrs={"i18n": "page title|browser tab"})
    parts = partition([title], [], implicit_tags={"title"})
    assert len(parts) == 1
    assert parts[0].i18n == "page title|browser tab"


def test_custom_marker_names():
    markers = MarkerConfig(attribute="translate", attribute_prefix="translate-")
    nodes = [
        element("b", "B", attrs={"translate": ""}),
        comment("translate"),
        text("T"),
        comment("/translate"),
        comment("i18n"),
    ]
    errors: list[ParseError] = []

    parts = partition(nodes, errors, markers=markers)

    assert [p.is_translatable for p in parts] == [True, True, False]
    assert errors == []


@pytest.mark.parametrize(
    "nodes",
    [
        [],
        [text("A")],
        [element("a", "A"), element("b", "B", attrs={"i18n": ""})],
        [comment("i18n"), element("c", "C"), text("D"), comment("/i18n"), text("E")],
        [text("x"), comment("/i18n"), comment("i18n"), text("y")],
        [comment("plain"), comment("i18n"), comment("i18n"), comment("/i18n"), comment("/i18n")],
    ],
)
def test_partition_is_lossless(nodes):
    """所有片段的 nodes 依次拼接后与原兄弟列表完全一致。"""
    parts = partition(nodes, [])
    flattened = _flatten(parts)
    assert len(flattened) == len(nodes)
    assert all(a is b for a, b in zip(flattened, nodes))
