import json
import logging
import sys

import pytest

from desktop_ui_mcp import __version__
from desktop_ui_mcp.config import (
    ConfigError,
    ServerConfig,
    TransportKind,
    configure_logging,
    load_config,
)


@pytest.fixture
def no_file(tmp_path):
    # 패키지 기본 config.json 대신 빈 섹션 파일 사용
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    return str(path)


class TestLoadConfig:

    def test_defaults(self, no_file):
        config = load_config(config_path=no_file, environ={})

        assert config == ServerConfig()
        assert config.name == "desktop-ui-control"
        assert config.version == __version__
        assert config.transport is TransportKind.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.verbose is False

    def test_file_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"desktop_ui_mcp": {"transport": "websocket", "port": 4000}, "other": {"port": 1}}),
            encoding="utf-8",
        )

        config = load_config(config_path=str(path), environ={})

        assert config.transport is TransportKind.WEBSOCKET
        assert config.port == 4000

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"desktop_ui_mcp": {"port": 4000}}), encoding="utf-8")

        config = load_config(
            config_path=str(path),
            environ={"DESKTOP_UI_MCP_PORT": "5000", "DESKTOP_UI_MCP_VERBOSE": "true"},
        )

        assert config.port == 5000
        assert config.verbose is True

    def test_cli_overrides_env(self, no_file):
        config = load_config(
            overrides={"transport": "WebSocket", "port": "8080", "host": None},
            config_path=no_file,
            environ={"DESKTOP_UI_MCP_PORT": "5000", "DESKTOP_UI_MCP_HOST": "127.0.0.1"},
        )

        assert config.transport is TransportKind.WEBSOCKET
        assert config.port == 8080
        # None 은 덮어쓰지 않음
        assert config.host == "127.0.0.1"

    def test_unsupported_transport(self, no_file):
        with pytest.raises(ConfigError, match="Unsupported transport: ftp"):
            load_config(overrides={"transport": "ftp"}, config_path=no_file, environ={})

    @pytest.mark.parametrize("port", ["abc", "0", "65536", "-1"])
    def test_invalid_port(self, no_file, port):
        with pytest.raises(ConfigError):
            load_config(overrides={"port": port}, config_path=no_file, environ={})

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_path=str(tmp_path / "missing.json"), environ={})

    def test_broken_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config(config_path=str(path), environ={})


class TestTransportKind:

    def test_parse_accepts_member(self):
        assert TransportKind.parse(TransportKind.WEBSOCKET) is TransportKind.WEBSOCKET

    def test_parse_is_case_insensitive(self):
        assert TransportKind.parse(" STDIO ") is TransportKind.STDIO

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            TransportKind.parse("http")


class TestConfigureLogging:

    def test_logs_to_stderr_only(self):
        logger = configure_logging(verbose=False)

        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is sys.stderr

    def test_verbose_is_debug_and_replaces_handlers(self):
        configure_logging(verbose=False)
        logger = configure_logging(verbose=True)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
