import pytest

from again import config
from again.errors import ConfigError
from again.lib import paths


def _write_config(home, text):
    home.mkdir(parents=True, exist_ok=True)
    paths.config_file().write_text(text)


def test_missing_config_is_empty(again_home):
    assert config.load_config() == {}


def test_config_loads_values(again_home):
    _write_config(again_home, "shell: /bin/zsh\nlog_level: debug\n")

    assert config.load_config() == {"shell": "/bin/zsh", "log_level": "debug"}
    assert config.log_level() == "DEBUG"


def test_invalid_types_fail_fast(again_home):
    _write_config(again_home, "shell: [zsh]\n")

    with pytest.raises(ConfigError):
        config.load_config()


def test_non_mapping_fails(again_home):
    _write_config(again_home, "- shell\n")

    with pytest.raises(ConfigError):
        config.load_config()


def test_shell_precedence(again_home, monkeypatch):
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    assert config.shell() == "/usr/bin/fish"

    monkeypatch.delenv("SHELL")
    assert config.shell() == config.DEFAULT_SHELL

    _write_config(again_home, "shell: /bin/bash\n")
    config._clear_cache()
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    assert config.shell() == "/bin/bash"


def test_default_log_level(again_home):
    assert config.log_level() == "WARNING"


def test_unknown_log_level_rejected(again_home):
    _write_config(again_home, "log_level: loud\n")

    with pytest.raises(ConfigError, match="log_level"):
        config.load_config()
