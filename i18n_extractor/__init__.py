# i18n_extractor/__init__.py
"""i18n-extractor: 从 HTML 风格的模板中提取可翻译消息的引擎。

该模块提供消息提取器、去重函数与配置管理，输出带占位符的、
具有稳定内容标识的消息记录，供下游的翻译目录生成使用。
"""

__version__ = "0.1.0"

from .config import ExtractorConfig, InterpolationConfig, MarkerConfig
from .extractor import MessageExtractor, extract_messages, remove_duplicates
from .types import ExtractionResult, I18nError, Message, ParseError

__all__ = [
    "__version__",
    "MessageExtractor",
    "ExtractorConfig",
    "InterpolationConfig",
    "MarkerConfig",
    "ExtractionResult",
    "Message",
    "ParseError",
    "I18nError",
    "extract_messages",
    "remove_duplicates",
]
