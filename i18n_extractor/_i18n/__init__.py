# i18n_extractor/_i18n/__init__.py
"""
i18n 提取的核心算法：分区、字符串化与消息构建。
本包是纯逻辑包，没有任何 I/O。
"""
from .builder import (
    message_from_attribute,
    message_from_i18n_attribute,
    message_from_part,
    split_marker_value,
)
from .partition import is_opening_comment, partition
from .stringify import StringifiedContent, stringify_interpolation, stringify_nodes

__all__ = [
    "partition",
    "is_opening_comment",
    "stringify_nodes",
    "stringify_interpolation",
    "StringifiedContent",
    "message_from_part",
    "message_from_attribute",
    "message_from_i18n_attribute",
    "split_marker_value",
]
