# i18n_extractor/logging_config.py
"""
本模块负责集中配置项目的日志系统：structlog 处理器链 + 标准 logging 输出端。

提供两种输出：
- console：开发环境的面板式输出，由 Rich 渲染；
- json   ：构建流水线中的机器可读输出（ISO-8601、UTC）。
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, Literal

import structlog
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from structlog.typing import Processor

if TYPE_CHECKING:
    from i18n_extractor.config import ExtractorConfig

APP_LOGGER_NAME = "i18n_extractor"


class PanelRenderer:
    """
    structlog 处理器：把一条日志渲染为 Rich 面板。
    面板标题为等宽的级别标签与 logger 名称，正文为事件与按键排序的上下文表格。
    """

    _LEVEL_STYLES = {
        "debug": ("blue", "DEBUG   "),
        "info": ("green", "INFO    "),
        "warning": ("yellow", "WARNING "),
        "error": ("bold red", "ERROR   "),
        "critical": ("bold magenta", "CRITICAL"),
    }

    def __init__(
        self,
        *,
        show_timestamp: bool = True,
        show_logger_name: bool = True,
        kv_truncate_at: int = 120,
        kv_key_width: int = 14,
    ):
        self._console = Console()
        self._show_timestamp = show_timestamp
        self._show_logger_name = show_logger_name
        self._kv_truncate_at = kv_truncate_at
        self._kv_key_width = kv_key_width

    def __call__(
        self, logger: Any, name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        event = str(event_dict.pop("event", "")).strip()
        if not event:
            return ""

        timestamp = event_dict.pop("timestamp", "")
        level = str(event_dict.pop("level", name)).lower()
        logger_name = event_dict.pop("logger", APP_LOGGER_NAME)
        style, label = self._LEVEL_STYLES.get(level, ("default", level.upper()))

        title = f"[{style}]{label}[/]"
        if self._show_logger_name:
            title += f" [cyan dim]({logger_name})[/]"

        body: list[Any] = [Text(event)]
        if event_dict:
            table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
            table.add_column(style="dim", justify="right", width=self._kv_key_width)
            table.add_column(overflow="fold")
            for key, value in sorted(event_dict.items()):
                table.add_row(f"{key} :", Text(self._format_value(value)))
            body.append(table)

        subtitle = (
            Text(str(timestamp), style="dim")
            if self._show_timestamp and timestamp
            else None
        )
        with self._console.capture() as capture:
            self._console.print(
                Panel(
                    Group(*body),
                    title=Text.from_markup(title),
                    title_align="left",
                    subtitle=subtitle,
                    subtitle_align="right",
                    border_style=style,
                    expand=False,
                )
            )
        return capture.get().rstrip()

    def _format_value(self, value: Any) -> str:
        text = value if isinstance(value, str) else repr(value)
        if len(text) > self._kv_truncate_at:
            return text[: self._kv_truncate_at] + "…"
        return text


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
    show_timestamp: bool = True,
    show_logger_name: bool = True,
) -> None:
    """
    配置全局的 structlog 日志系统。

    Args:
        log_level: 本项目 logger 的最低日志级别。
        log_format: 'console' 使用 Rich 面板，'json' 使用 JSON 行。
        show_timestamp: console 模式下是否显示时间戳。
        show_logger_name: console 模式下是否显示 logger 名称。
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "console":
        processors.append(structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False))
        processors.append(
            PanelRenderer(show_timestamp=show_timestamp, show_logger_name=show_logger_name)
        )
    else:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # structlog 已经把事件渲染成字符串，标准 logging 只需原样输出
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(log_level.upper())

    structlog.get_logger("i18n_extractor.logging_config").info(
        "日志系统已配置完成。", log_format=log_format, app_log_level=log_level.upper()
    )


def setup_logging_from_config(cfg: ExtractorConfig) -> None:
    """根据 `ExtractorConfig.logging` 一键初始化日志系统。"""
    setup_logging(log_level=cfg.logging.level, log_format=cfg.logging.format)
