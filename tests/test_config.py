# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for TOML config loading and SocketConfig layering."""

from __future__ import annotations

from pathlib import Path

import pytest

from kitten_socket import KittenSocket
from kitten_socket.config import ConfigError, find_config_file, load_config
from kitten_socket.socket_config import SocketConfig

SOCKET_TOML = """\
[socket]
url = "http://localhost:8080"
registerEndpoint = "custom_register"
messageBrokerPrefix = "custom_game_get"
applicationDestinationPrefix = "custom_game_post"
silent = true
"""


def write(tmp_path: Path, text: str, name: str = "kitten-socket.toml") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_load(self, tmp_path: Path) -> None:
        config = load_config(write(tmp_path, SOCKET_TOML))
        assert config["socket"]["registerEndpoint"] == "custom_register"
        assert config["socket"]["silent"] is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to parse TOML"):
            load_config(write(tmp_path, "[socket\nurl = "))

    def test_other_tables_ignored(self, tmp_path: Path) -> None:
        config = load_config(write(tmp_path, SOCKET_TOML + "\n[tool]\nline_length = 100\n"))
        assert config["tool"] == {"line_length": 100}

    def test_env_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAME_HOST", "games.example.com")
        config = load_config(write(tmp_path, '[socket]\nurl = "https://${GAME_HOST}"\n'))
        assert config["socket"]["url"] == "https://games.example.com"

    def test_env_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GAME_URL", raising=False)
        config = load_config(write(tmp_path, '[socket]\nurl = "${GAME_URL:-ws://localhost}"\n'))
        assert config["socket"]["url"] == "ws://localhost"

    def test_env_required(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GAME_URL", raising=False)
        with pytest.raises(ConfigError, match="GAME_URL"):
            load_config(write(tmp_path, '[socket]\nurl = "${GAME_URL}"\n'))

    def test_env_in_lists(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GAME_TOPIC", "broadcast")
        config = load_config(write(tmp_path, 'topics = ["${GAME_TOPIC}", "chat"]\n'))
        assert config["topics"] == ["broadcast", "chat"]


class TestFindConfigFile:
    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = write(tmp_path, SOCKET_TOML, "custom.toml")
        monkeypatch.setenv("KITTEN_SOCKET_CONFIG", str(path))
        assert find_config_file() == path

    def test_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("KITTEN_SOCKET_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        path = write(tmp_path, SOCKET_TOML)
        assert find_config_file() == tmp_path / "kitten-socket.toml"
        assert path.exists()

    def test_generic_config_toml_ignored(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("KITTEN_SOCKET_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        write(tmp_path, SOCKET_TOML, "config.toml")
        assert find_config_file() is None


class TestSocketConfig:
    def test_from_file(self, tmp_path: Path) -> None:
        config = SocketConfig(config_file=write(tmp_path, SOCKET_TOML))
        assert config["url"] == "http://localhost:8080"
        assert config["register_endpoint"] == "custom_register"
        assert config["message_broker_prefix"] == "custom_game_get"
        assert config["application_destination_prefix"] == "custom_game_post"
        assert config["silent"] is True

    def test_caller_overrides_file(self, tmp_path: Path) -> None:
        config = SocketConfig(
            config_file=write(tmp_path, SOCKET_TOML),
            url="wss://games.example.com",
        )
        assert config["url"] == "wss://games.example.com"
        assert config["register_endpoint"] == "custom_register"

    def test_defaults(self) -> None:
        config = SocketConfig(
            url="ws://localhost",
            register_endpoint="register",
            message_broker_prefix="get",
            application_destination_prefix="post",
        )
        assert config["silent"] is False

    def test_unknown_key(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="heartbeat"):
            SocketConfig(config_file=write(tmp_path, SOCKET_TOML + "heartbeat = 10\n"))

    def test_socket_kwargs(self, tmp_path: Path) -> None:
        kwargs = SocketConfig(config_file=write(tmp_path, SOCKET_TOML)).socket_kwargs()
        assert kwargs == {
            "url": "http://localhost:8080",
            "register_endpoint": "custom_register",
            "message_broker_prefix": "custom_game_get",
            "application_destination_prefix": "custom_game_post",
            "silent": True,
        }

    def test_kitten_socket_from_config(self, tmp_path: Path, recorder) -> None:
        config = SocketConfig(config_file=write(tmp_path, SOCKET_TOML))
        socket = KittenSocket.from_config(config, client_factory=recorder)
        assert socket.endpoint_url == "ws://localhost:8080/custom_register"
        assert socket.silent is True
        assert recorder.last.url == "ws://localhost:8080/custom_register"

    def test_snake_case_socket_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="register_endpoint"):
            SocketConfig(config_file=write(tmp_path, '[socket]\nregister_endpoint = "x"\n'))

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KITTEN_SOCKET_URL", "ws://envhost")
        config = SocketConfig(config_file=write(tmp_path, SOCKET_TOML))
        assert config["url"] == "ws://envhost"
        assert config["register_endpoint"] == "custom_register"

    def test_caller_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KITTEN_SOCKET_URL", "ws://envhost")
        config = SocketConfig(
            config_file=write(tmp_path, SOCKET_TOML),
            url="wss://games.example.com",
        )
        assert config["url"] == "wss://games.example.com"
