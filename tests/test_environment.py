from loguru import logger

from promo_scraper.utils import ConfigManager, Logger


def test_config_from_env_file(tmp_path, monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "99")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comentário\nDEBUG=true\nREQUEST_TIMEOUT=15\nLOG_FILE=\"logs/app.log\"\nINVALIDO\n",
        encoding="utf-8",
    )
    config = ConfigManager(str(env_file))

    assert config.debug is True
    assert config.request_timeout == 15.0
    assert config.log_file == "logs/app.log"
    assert config.get("INVALIDO") is None


def test_config_defaults_and_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "12")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    config = ConfigManager(str(tmp_path / "inexistente.env"))

    assert config.debug is False
    assert config.request_timeout == 12.0
    assert config.log_file is None


def test_invalid_timeout_uses_default(tmp_path, monkeypatch):
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("REQUEST_TIMEOUT=abc\n", encoding="utf-8")
    assert ConfigManager(str(env_file)).request_timeout == 30.0

    env_file.write_text("REQUEST_TIMEOUT=-5\n", encoding="utf-8")
    assert ConfigManager(str(env_file)).request_timeout == 30.0


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "scraper.log"
    try:
        Logger.setup_logging(level="DEBUG", log_file=str(log_file))
        logger.debug("mensagem de teste")
    finally:
        logger.remove()

    assert "mensagem de teste" in log_file.read_text(encoding="utf-8")
