"""
Configuração de logging da aplicação.
"""

from logging.config import dictConfig

from app.config import get_settings


def setup_logging() -> None:
    """Configura o logger raiz com o nível definido em LOG_LEVEL."""
    settings = get_settings()
    level = settings.LOG_LEVEL.upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": level},
        }
    )
