# tests/unit/test_logging_config.py
"""测试日志系统的配置与面板渲染。"""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from i18n_extractor import ExtractorConfig
from i18n_extractor.config import LoggingConfig
from i18n_extractor.logging_config import (
    APP_LOGGER_NAME,
    PanelRenderer,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """测试结束后恢复标准 logging 与 structlog 的全局状态。"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    root_level = root_logger.level
    app_level = logging.getLogger(APP_LOGGER_NAME).level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(root_level)
    logging.getLogger(APP_LOGGER_NAME).setLevel(app_level)
    structlog.reset_defaults()


def _json_lines(output: str) -> list[dict]:
    records = []
    for line in output.splitlines():
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return records


def test_json_logging_setup(restore_logging, capsys):
    setup_logging(log_level="debug", log_format="json")

    records = _json_lines(capsys.readouterr().err)
    setup_record = next(r for r in records if r.get("event") == "日志系统已配置完成。")
    assert setup_record["log_format"] == "json"
    assert setup_record["app_log_level"] == "DEBUG"
    assert setup_record["level"] == "info"
    assert setup_record["timestamp"].endswith("Z")
    assert logging.getLogger(APP_LOGGER_NAME).level == logging.DEBUG


def test_extraction_events_are_logged(restore_logging, capsys, extractor):
    setup_logging(log_format="json")

    extractor.extract("<p i18n>x</p>", "page.html")

    records = _json_lines(capsys.readouterr().err)
    done = next(r for r in records if r.get("event") == "消息提取完成。")
    assert done["source_url"] == "page.html"
    assert done["message_count"] == 1
    assert done["logger"] == "i18n_extractor.extractor"


def test_setup_from_config(restore_logging, capsys):
    config = ExtractorConfig(logging=LoggingConfig(level="WARNING", format="json"))

    setup_logging_from_config(config)

    assert logging.getLogger(APP_LOGGER_NAME).level == logging.WARNING
    # 配置完成的提示是 INFO 级别，低于 WARNING 时不会输出
    assert "日志系统已配置完成。" not in capsys.readouterr().err


def test_panel_renderer_output():
    renderer = PanelRenderer(show_timestamp=True, show_logger_name=True)

    output = renderer(
        None,
        "info",
        {
            "event": "消息提取完成。",
            "level": "info",
            "logger": "i18n_extractor.extractor",
            "timestamp": "2024-01-01 12:00:00",
            "source_url": "templates/pages/checkout/summary.html",
            "message_count": 3,
        },
    )

    assert "INFO" in output
    assert "i18n_extractor.extractor" in output
    assert "消息提取完成。" in output
    assert "source_url" in output
    assert "templates/pages/checkout/summary.html" in output
    assert "2024-01-01 12:00:00" in output


def test_panel_renderer_truncates_long_values():
    renderer = PanelRenderer(kv_truncate_at=10)
    assert renderer._format_value("x" * 20) == "x" * 10 + "…"
    assert renderer._format_value(42) == "42"


def test_panel_renderer_skips_empty_events():
    assert PanelRenderer()(None, "info", {"event": "  "}) == ""
