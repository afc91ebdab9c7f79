"""Configuración de logging estructurado para la calculadora."""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "calculator"


class StructuredFormatter(logging.Formatter):
    """Formato: marca de tiempo ISO, nivel, nombre del logger y mensaje."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Configura el logger raíz de la calculadora.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Ruta opcional de un archivo de log además de stderr

    Returns:
        Logger configurado
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Evita handlers duplicados al reconfigurar
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger hijo dentro del espacio de nombres 'calculator'."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
