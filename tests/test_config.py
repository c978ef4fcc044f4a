import logging

from pos_core.config import Config, configure_logging, load_config


def test_load_config_defaults(monkeypatch):
    for name in ("POS_DB_PATH", "POS_SNAPSHOT_KEY", "POS_LOG_LEVEL", "POS_DEFAULT_USERNAME",
                 "POS_DEFAULT_PASSWORD", "POS_COMPANY_NAME", "POS_CURRENCY"):
        monkeypatch.delenv(name, raising=False)
    assert load_config() == Config()


def test_load_config_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("POS_DB_PATH", str(tmp_path / "shop.db"))
    monkeypatch.setenv("POS_SNAPSHOT_KEY", "shop")
    monkeypatch.setenv("POS_LOG_LEVEL", "debug")
    monkeypatch.setenv("POS_CURRENCY", "USD")

    config = load_config()
    assert config.db_path == str(tmp_path / "shop.db")
    assert config.snapshot_key == "shop"
    assert config.log_level == "DEBUG"
    assert config.currency == "USD"


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("warning")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
