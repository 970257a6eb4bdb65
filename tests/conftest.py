# tests/conftest.py
"""项目全局共享的测试 Fixtures。"""

from collections.abc import Generator
from typing import Any

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from i18n_extractor import MessageExtractor
from i18n_extractor.expression_parser import DefaultExpressionParser
from i18n_extractor.markup_parser import SoupMarkupParser


@pytest.fixture(scope="session", autouse=True)
def disable_rich_colors_for_tests(
    session_mocker: MockerFixture,
) -> Generator[None, None, None]:
    """全局禁用 rich 库的颜色输出，以确保日志渲染结果的确定性。"""
    original_init = Console.__init__

    def new_init(self: Console, *args: Any, **kwargs: Any) -> None:
        kwargs["force_terminal"] = False
        kwargs["color_system"] = None
        original_init(self, *args, **kwargs)

    session_mocker.patch("rich.console.Console.__init__", new=new_init)
    yield


@pytest.fixture
def expression_parser() -> DefaultExpressionParser:
    return DefaultExpressionParser()


@pytest.fixture
def markup_parser() -> SoupMarkupParser:
    return SoupMarkupParser()


@pytest.fixture
def extractor(
    markup_parser: SoupMarkupParser, expression_parser: DefaultExpressionParser
) -> MessageExtractor:
    """一个配置了常见隐式标签与隐式属性的提取器。"""
    return MessageExtractor(
        markup_parser,
        expression_parser,
        implicit_tags=["title"],
        implicit_attrs={"img": ["alt", "title"], "input": ["placeholder"]},
    )
