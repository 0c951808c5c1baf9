"""
서버 설정

우선순위 (낮음 → 높음):
  DEFAULT_CONFIG → config.json ("desktop_ui_mcp" 섹션) → 환경변수 → CLI 인자
"""

import enum
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from . import __version__

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_PATH = os.path.join(PACKAGE_DIR, "config.json")
CONFIG_SECTION = "desktop_ui_mcp"

DEFAULT_CONFIG = {
    "name": "desktop-ui-control",
    "transport": "stdio",
    "host": "0.0.0.0",
    "port": 3000,
    "verbose": False,
}

ENV_PREFIX = "DESKTOP_UI_MCP_"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class ConfigError(ValueError):
    """잘못된 설정 (시작 시 치명적, 재시도 없음)"""


class TransportKind(str, enum.Enum):
    STDIO = "stdio"
    WEBSOCKET = "websocket"

    @classmethod
    def parse(cls, value: str) -> "TransportKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"Unsupported transport: {value}") from None


@dataclass(frozen=True)
class ServerConfig:
    name: str = DEFAULT_CONFIG["name"]
    version: str = __version__
    transport: TransportKind = TransportKind.STDIO
    host: str = DEFAULT_CONFIG["host"]
    port: int = DEFAULT_CONFIG["port"]
    verbose: bool = False


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {value!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"Port out of range: {port}")
    return port


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_config(
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> ServerConfig:
    """설정 병합 후 검증. 네트워크/스트림 자원은 열지 않는다."""
    cfg = dict(DEFAULT_CONFIG)

    path = config_path or CONFIG_PATH
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                user_cfg = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e
        if CONFIG_SECTION in user_cfg:
            cfg.update(user_cfg[CONFIG_SECTION])
    elif config_path:
        raise ConfigError(f"Config file not found: {config_path}")

    # 환경변수 우선
    env = os.environ if environ is None else environ
    for key in ("transport", "host", "port", "verbose"):
        value = env.get(ENV_PREFIX + key.upper())
        if value:
            cfg[key] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            cfg[key] = value

    return ServerConfig(
        name=str(cfg["name"]),
        transport=TransportKind.parse(cfg["transport"]),
        host=str(cfg["host"]),
        port=_parse_port(cfg["port"]),
        verbose=_parse_bool(cfg["verbose"]),
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    패키지 로거 설정 (시작 시 1회).
    stdout 은 stdio 전송이 사용하므로 로그는 stderr 로만 보낸다.
    """
    logger = logging.getLogger("desktop_ui_mcp")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    return logger
