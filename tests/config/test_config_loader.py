# tests/config/test_config_loader.py
from flakeproof.config import EngineConfig, load_config


def test_defaults_without_yaml_or_env(tmp_path):
    config = load_config(tmp_path / "missing.yml", environ={})

    assert config.timeout_ms == 45000
    assert config.retry_count == 2
    assert config.trace_capacity == 50
    assert config.html_dump_max_length == 200000
    assert config.headless is False
    assert config.locale == "zh-CN"
    assert config.proxy is None
    assert config.user_data_dir.endswith("profile")


def test_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(
        "engine:\n"
        "  timeout_ms: 1000\n"
        "  headless: true\n"
        "  locale: en-US\n"
        "  unknown_key: 1\n",
        encoding="utf-8",
    )

    config = load_config(path, environ={})

    assert config.timeout_ms == 1000
    assert config.headless is True
    assert config.locale == "en-US"


def test_flat_yaml_is_accepted(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("retry_count: 5\n", encoding="utf-8")
    assert load_config(path, environ={}).retry_count == 5


def test_env_overrides_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("timeout_ms: 1000\n", encoding="utf-8")

    config = load_config(path, environ={
        "FLAKEPROOF_TIMEOUT_MS": "2500",
        "FLAKEPROOF_HEADLESS": "yes",
        "FLAKEPROOF_PROXY": "http://127.0.0.1:8080",
        "FLAKEPROOF_USER_DATA_DIR": str(tmp_path / "p"),
    })

    assert config.timeout_ms == 2500
    assert config.headless is True
    assert config.proxy == "http://127.0.0.1:8080"
    assert config.user_data_dir == str(tmp_path / "p")


def test_bad_numbers_fall_back(tmp_path):
    config = load_config(tmp_path / "missing.yml", environ={
        "FLAKEPROOF_TIMEOUT_MS": "soon",
        "FLAKEPROOF_RETRY_COUNT": "0",
        "FLAKEPROOF_TRACE_CAPACITY": "-4",
    })

    assert config.timeout_ms == 45000
    assert config.retry_count == 2
    assert config.trace_capacity == 50


def test_unparsable_yaml_yields_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("engine: [unclosed\n", encoding="utf-8")
    assert load_config(path, environ={}) == EngineConfig.default()


def test_blank_text_keeps_default(tmp_path):
    config = load_config(tmp_path / "missing.yml", environ={"FLAKEPROOF_LOCALE": "   "})
    assert config.locale == "zh-CN"
