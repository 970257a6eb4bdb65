# i18n_extractor/extractor.py
"""
本模块包含消息提取的主驱动器。

算法：
1. 使用标记解析器得到模板的 AST；解析器报告任何错误时立即返回，不做提取。
2. 对每一层兄弟节点进行分区（见 `_i18n.partition`），逐个处理片段。
3. 片段不可翻译时，提取元素自身的可翻译属性，然后递归处理其子节点。
4. 片段可翻译时，将其字符串化为一条消息，再提取根元素以及所有后代元素上的
   可翻译属性：嵌套元素上的属性不会被并入外层消息的正文。
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import structlog
from pydantic import ValidationError

from i18n_extractor._i18n import (
    is_opening_comment,
    message_from_attribute,
    message_from_i18n_attribute,
    message_from_part,
    partition,
)
from i18n_extractor._i18n.partition import NESTED_SECTION
from i18n_extractor.ast import Comment, Element, Node
from i18n_extractor.config import (
    DEFAULT_INTERPOLATION_CONFIG,
    DEFAULT_MARKER_CONFIG,
    ExtractorConfig,
    InterpolationConfig,
    MarkerConfig,
)
from i18n_extractor.exceptions import ConfigurationError
from i18n_extractor.expression_parser import DefaultExpressionParser
from i18n_extractor.interfaces import ExpressionParser, MarkupParser
from i18n_extractor.markup_parser import SoupMarkupParser
from i18n_extractor.types import (
    ExtractionResult,
    I18nError,
    Message,
    MessageBuildResult,
    ParseError,
    Part,
)

logger = structlog.get_logger(__name__)

NESTED_ELEMENT = "Could not mark an element as translatable inside a translatable section."


def remove_duplicates(messages: Iterable[Message]) -> list[Message]:
    """按标识去重：每个标识保留第一次出现的消息，并保持首次出现的相对顺序。"""
    unique: dict[str, Message] = {}
    for message in messages:
        unique.setdefault(message.identity, message)
    return list(unique.values())


@dataclass
class _ExtractionRun:
    """单次 `extract` 调用的全部可变状态，保证提取器实例可重入。"""

    interpolation: InterpolationConfig
    messages: list[Message] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    def add(self, result: MessageBuildResult) -> None:
        if isinstance(result, I18nError):
            logger.debug("发现 i18n 错误。", error=str(result))
            self.errors.append(result)
        else:
            self.messages.append(result)


class MessageExtractor:
    """从模板中提取全部可翻译消息。"""

    def __init__(
        self,
        markup_parser: MarkupParser,
        expression_parser: ExpressionParser,
        implicit_tags: Collection[str] = (),
        implicit_attrs: Mapping[str, Collection[str]] | None = None,
        *,
        markers: MarkerConfig = DEFAULT_MARKER_CONFIG,
        interpolation: InterpolationConfig = DEFAULT_INTERPOLATION_CONFIG,
    ):
        self._markup_parser = markup_parser
        self._expression_parser = expression_parser
        self._implicit_tags = frozenset(implicit_tags)
        self._implicit_attrs = {
            tag: frozenset(names) for tag, names in (implicit_attrs or {}).items()
        }
        self._markers = markers
        self._interpolation = interpolation

    @classmethod
    def from_config(
        cls,
        config: ExtractorConfig,
        markup_parser: MarkupParser | None = None,
        expression_parser: ExpressionParser | None = None,
    ) -> MessageExtractor:
        """根据 `ExtractorConfig` 创建提取器，未提供的协作者使用默认实现。"""
        return cls(
            markup_parser or SoupMarkupParser(),
            expression_parser or DefaultExpressionParser(),
            config.implicit_tags,
            config.implicit_attrs,
            markers=config.markers,
            interpolation=config.interpolation,
        )

    def extract(
        self,
        template: str,
        source_url: str,
        interpolation: InterpolationConfig | None = None,
    ) -> ExtractionResult:
        """
        提取模板中的所有消息。

        Args:
            template: 模板源码。
            source_url: 模板的来源标识，只用于诊断信息。
            interpolation: 覆盖构造时给定的插值定界符。

        Returns:
            `ExtractionResult`。其 `errors` 先列出 i18n 错误，再列出解析器错误；
            解析器报告错误时 `messages` 为空。
        """
        run = _ExtractionRun(interpolation=interpolation or self._interpolation)
        parsed = self._markup_parser.parse(template, source_url, True)

        if parsed.errors:
            logger.warning(
                "模板解析失败，跳过消息提取。",
                source_url=source_url,
                error_count=len(parsed.errors),
            )
            return ExtractionResult(messages=[], errors=list(parsed.errors))

        self._recurse(parsed.root_nodes, run)
        logger.info(
            "消息提取完成。",
            source_url=source_url,
            message_count=len(run.messages),
            error_count=len(run.errors),
        )
        return ExtractionResult(messages=run.messages, errors=run.errors)

    def _recurse(self, nodes: Sequence[Node], run: _ExtractionRun) -> None:
        for part in partition(nodes, run.errors, self._implicit_tags, self._markers):
            self._extract_from_part(part, run)

    def _extract_from_part(self, part: Part, run: _ExtractionRun) -> None:
        if not part.is_translatable:
            for node in part.children:
                if isinstance(node, Element):
                    self._extract_from_attributes(node, run)
                    self._recurse(node.children, run)
            return

        run.add(message_from_part(part, self._expression_parser, run.interpolation))
        if part.root_element is not None:
            self._extract_from_attributes(part.root_element, run)
            self._extract_from_nested_attributes(part.root_element.children, run)
        else:
            # 区域顶层的注释标记已在分区时检查过
            self._extract_from_nested_attributes(
                [node for node in part.children if isinstance(node, Element)], run
            )

    def _extract_from_nested_attributes(
        self, nodes: Sequence[Node], run: _ExtractionRun
    ) -> None:
        """遍历可翻译区域内的所有后代元素，提取它们各自的可翻译属性。"""
        for node in nodes:
            if isinstance(node, Element):
                if node.get_attr(self._markers.attribute) is not None:
                    run.errors.append(I18nError(NESTED_ELEMENT, node.source_span))
                self._extract_from_attributes(node, run)
                self._extract_from_nested_attributes(node.children, run)
            elif isinstance(node, Comment) and is_opening_comment(node, self._markers):
                run.errors.append(I18nError(NESTED_SECTION, node.source_span))

    def _extract_from_attributes(self, element: Element, run: _ExtractionRun) -> None:
        prefix = self._markers.attribute_prefix
        explicit_names: set[str] = set()

        # `i18n-` 前缀的属性优先：其值是含义/描述，正文取自同名的普通属性
        for attr in element.attrs:
            if attr.name.startswith(prefix):
                explicit_names.add(attr.name[len(prefix):])
                run.add(
                    message_from_i18n_attribute(
                        element,
                        attr,
                        self._expression_parser,
                        run.interpolation,
                        self._markers,
                    )
                )

        implicit_names = self._implicit_attrs.get(element.name, frozenset())
        for attr in element.attrs:
            if (
                not attr.name.startswith(prefix)
                and attr.name not in explicit_names
                and attr.name in implicit_names
            ):
                run.add(
                    message_from_attribute(
                        attr, self._expression_parser, run.interpolation
                    )
                )


def extract_messages(
    template: str,
    source_url: str,
    config: ExtractorConfig | None = None,
) -> ExtractionResult:
    """使用默认解析器与给定配置（缺省时从环境变量加载）提取消息的便捷函数。"""
    if config is None:
        try:
            config = ExtractorConfig()
        except ValidationError as e:
            raise ConfigurationError(f"无法从环境变量加载提取器配置: {e}") from e
    extractor = MessageExtractor.from_config(config)
    return extractor.extract(template, source_url)
