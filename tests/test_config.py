"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
import unittest

from lumina_design.config import DEFAULT_CONFIG, load_config


class ConfigTests(unittest.TestCase):
    """Validate config merge and fallback behavior."""

    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config = load_config(config_path=config_path)
            self.assertEqual(config["app"]["title"], "Lumina Design")
            self.assertEqual(config["gemini"]["image_model"], "gemini-2.5-flash-image")
            self.assertEqual(config["gemini"]["chat_model"], "gemini-3-pro-preview")
            self.assertEqual(config["chat"]["provider"], "gemini")
            self.assertEqual(config["ollama"]["model"], "llava")
            self.assertEqual(config["upload"]["max_image_bytes"], 10 * 1024 * 1024)
            self.assertEqual(
                config["keybinds"]["upload_image"],
                DEFAULT_CONFIG["keybinds"]["upload_image"],
            )
            self.assertEqual(config["logging"]["level"], "INFO")
            self.assertIn("Interior Design Consultant", config["gemini"]["system_prompt"])

    def test_partial_config_overrides_selected_values(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[gemini]
chat_model = "gemini-2.5-flash"

[chat]
provider = "ollama"

[ui]
show_timestamps = true
slider_step = 2.5
                """.strip(),
                encoding="utf-8",
            )
            config = load_config(config_path=config_path)
            self.assertEqual(config["gemini"]["chat_model"], "gemini-2.5-flash")
            self.assertEqual(
                config["gemini"]["image_model"], DEFAULT_CONFIG["gemini"]["image_model"]
            )
            self.assertEqual(config["chat"]["provider"], "ollama")
            self.assertTrue(config["ui"]["show_timestamps"])
            self.assertEqual(config["ui"]["slider_step"], 2.5)
            self.assertEqual(config["app"]["title"], DEFAULT_CONFIG["app"]["title"])

    def test_invalid_values_fallback_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[gemini]
timeout = -1

[chat]
provider = "carrier-pigeon"

[ui]
user_message_color = "blue"

[keybinds]
upload_image = ""
                """.strip(),
                encoding="utf-8",
            )
            with self.assertLogs("lumina_design.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config["gemini"]["timeout"], DEFAULT_CONFIG["gemini"]["timeout"])
            self.assertEqual(config["chat"]["provider"], "gemini")
            self.assertEqual(
                config["ui"]["user_message_color"],
                DEFAULT_CONFIG["ui"]["user_message_color"],
            )
            self.assertEqual(
                config["keybinds"]["upload_image"],
                DEFAULT_CONFIG["keybinds"]["upload_image"],
            )

    def test_unparseable_toml_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[gemini\napi_key = ", encoding="utf-8")
            with self.assertLogs("lumina_design.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config, DEFAULT_CONFIG)

    def test_remote_host_disallowed_by_default_policy(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[ollama]
host = "http://example.com:11434"
                """.strip(),
                encoding="utf-8",
            )
            with self.assertLogs("lumina_design.config", level="WARNING"):
                config = load_config(config_path=config_path)
            self.assertEqual(config["ollama"]["host"], DEFAULT_CONFIG["ollama"]["host"])
            self.assertFalse(config["security"]["allow_remote_hosts"])

    def test_remote_host_allowed_when_policy_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[ollama]
host = "http://example.com:11434"

[security]
allow_remote_hosts = true
allowed_hosts = ["localhost"]
                """.strip(),
                encoding="utf-8",
            )
            config = load_config(config_path=config_path)
            self.assertEqual(config["ollama"]["host"], "http://example.com:11434")
            self.assertTrue(config["security"]["allow_remote_hosts"])

    def test_api_key_whitespace_trimmed(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text('[gemini]\napi_key = "  abc123  "\n', encoding="utf-8")
            config = load_config(config_path=config_path)
            self.assertEqual(config["gemini"]["api_key"], "abc123")

    @unittest.skipIf(os.name != "posix", "POSIX permissions only")
    def test_config_file_permissions_made_private(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text('[gemini]\napi_key = "secret"\n', encoding="utf-8")
            config_path.chmod(0o644)
            load_config(config_path=config_path)
            self.assertEqual(stat.S_IMODE(config_path.stat().st_mode), 0o600)

    def test_missing_parent_directory_created(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "nested" / "dir" / "config.toml"
            load_config(config_path=config_path)
            self.assertTrue(config_path.parent.is_dir())


if __name__ == "__main__":
    unittest.main()
