# i18n_extractor/_identity/__init__.py
"""
消息标识模块。

消息的标识由 `(content, meaning)` 的 RFC 8785 (JCS) 规范化字节的 SHA-256
哈希决定，是消息去重的唯一依据。
"""
from .encoder import CanonicalizationError, canonical_json, message_identity

__all__ = ["CanonicalizationError", "canonical_json", "message_identity"]
