import os
import sys
from typing import Dict, Optional
from loguru import logger

DEFAULT_REQUEST_TIMEOUT = 30.0

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


class ConfigManager:
    """Configurações do scraper: arquivo .env, depois variáveis de ambiente.

    Chaves conhecidas: DEBUG, REQUEST_TIMEOUT e LOG_FILE.
    """

    KEYS = ("DEBUG", "REQUEST_TIMEOUT", "LOG_FILE")

    def __init__(self, config_file: str = ".env"):
        self.config_file = config_file
        self.values = self._read_env_file()
        for key in self.KEYS:
            if key not in self.values and key in os.environ:
                self.values[key] = os.environ[key]

    def _read_env_file(self) -> Dict[str, str]:
        values = {}
        if not os.path.exists(self.config_file):
            return values

        with open(self.config_file, "r", encoding="utf-8") as f:
            for line in f:
                key, sep, value = line.strip().partition("=")
                if sep and key and not key.startswith("#"):
                    values[key.strip()] = value.strip().strip("\"'")
        return values

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    @property
    def debug(self) -> bool:
        return self.get("DEBUG", "").lower() in ("true", "1", "yes", "on")

    @property
    def request_timeout(self) -> float:
        """Timeout em segundos; valores inválidos ou não positivos usam o padrão"""
        try:
            timeout = float(self.get("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        except ValueError:
            logger.warning(
                f"REQUEST_TIMEOUT inválido, usando {DEFAULT_REQUEST_TIMEOUT:.0f}s"
            )
            return DEFAULT_REQUEST_TIMEOUT
        return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT

    @property
    def log_file(self) -> Optional[str]:
        return self.get("LOG_FILE") or None


class Logger:
    """Saídas do loguru usadas pela linha de comando"""

    @staticmethod
    def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
        logger.remove()
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

        if log_file:
            logger.add(
                log_file,
                level=level,
                format=FILE_FORMAT,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
            )
        return logger
