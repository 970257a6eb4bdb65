# i18n_extractor/_identity/encoder.py
from __future__ import annotations

import hashlib

import rfc8785


class CanonicalizationError(ValueError):
    """当标识载荷无法进行 JCS 规范化时抛出。"""


def _canonical_bytes(content: str, meaning: str | None) -> bytes:
    try:
        return rfc8785.dumps({"content": content, "meaning": meaning})
    except rfc8785.CanonicalizationError as e:
        raise CanonicalizationError(f"JCS canonicalization failed: {e}") from e


def message_identity(content: str, meaning: str | None) -> str:
    """
    计算消息标识。

    标识是严格的内容匹配：不做空白折叠、不做大小写归一化，
    因此含义上有细微差别的两条消息永远不会被合并。

    Args:
        content: 带占位符的消息正文。
        meaning: 消息含义；None 与空字符串被视为不同的值。

    Returns:
        64 位十六进制的 SHA-256 摘要。
    """
    return hashlib.sha256(_canonical_bytes(content, meaning)).hexdigest()


def canonical_json(content: str, meaning: str | None) -> str:
    """返回参与标识计算的 JCS 文本（用于日志与排错）。"""
    return _canonical_bytes(content, meaning).decode("utf-8")
