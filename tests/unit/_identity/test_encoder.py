# tests/unit/_identity/test_encoder.py
"""测试消息标识：JCS 规范化与 SHA-256 摘要。"""

from __future__ import annotations

import hashlib

import pytest

from i18n_extractor._identity import CanonicalizationError, canonical_json, message_identity
from i18n_extractor.types import Message


def test_identity_format():
    identity = message_identity("Hello", None)
    assert len(identity) == 64
    assert int(identity, 16) >= 0


def test_identity_matches_canonical_json():
    """标识等于规范化 JSON 文本的 SHA-256 摘要。"""
    payload = canonical_json('<ph name="e0">Hi</ph>', "greeting")
    assert payload == '{"content":"<ph name=\\"e0\\">Hi</ph>","meaning":"greeting"}'
    assert message_identity('<ph name="e0">Hi</ph>', "greeting") == (
        hashlib.sha256(payload.encode("utf-8")).hexdigest()
    )


def test_identity_is_deterministic():
    assert message_identity("Save", "button") == message_identity("Save", "button")


@pytest.mark.parametrize(
    "other",
    [
        ("Save ", "button"),
        ("save", "button"),
        ("Save", "Button"),
        ("Save", None),
        ("Save", ""),
    ],
)
def test_identity_is_strict(other):
    """不做空白或大小写归一化：任何细微差别都会得到不同的标识。"""
    assert message_identity("Save", "button") != message_identity(*other)


def test_unicode_content():
    payload = canonical_json("保存", None)
    assert payload == '{"content":"保存","meaning":null}'


def test_message_identity_ignores_description_and_location():
    a = Message(content="Save", meaning="button", description="toolbar")
    b = Message(content="Save", meaning="button", description="dialog footer")
    assert a.identity == b.identity
    assert a.identity == message_identity("Save", "button")


def test_non_utf8_content_is_rejected():
    """无法编码为 UTF-8 的正文（孤立代理项）不能生成标识。"""
    with pytest.raises(CanonicalizationError) as exc_info:
        message_identity("broken \ud800 text", None)
    assert "JCS canonicalization failed" in str(exc_info.value)
