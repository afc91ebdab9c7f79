"""Configuración centralizada de la calculadora.

Define:
- Modo angular por defecto
- Límites de entrada
- Tolerancia de las funciones trigonométricas inversas
- Parámetros de formato del resultado

Los valores ajustables pueden sobrescribirse con variables de entorno
con prefijo CALCULATOR_.
"""

import importlib.metadata
import os

try:
    VERSION = importlib.metadata.version("calculadora-rpn")
except importlib.metadata.PackageNotFoundError:
    # Paquete no instalado (ejecución desde el repositorio)
    VERSION = "0.1.0"

DEFAULT_ANGLE_MODE = os.getenv("CALCULATOR_ANGLE_MODE", "deg").lower()

# Límite de entrada (caracteres)
MAX_INPUT_LENGTH = int(os.getenv("CALCULATOR_MAX_INPUT_LENGTH", "10000"))

# asin/acos aceptan argumentos hasta 1e-12 fuera de [-1, 1] y los recortan.
# Forma parte del contrato: no es configurable.
INVERSE_TRIG_TOLERANCE = 1e-12

# Formato del resultado
DISPLAY_PRECISION = int(
    os.getenv("CALCULATOR_DISPLAY_PRECISION", "12")
)  # dígitos significativos en notación fija
SCI_MANTISSA_DIGITS = 8  # decimales de la mantisa en notación científica
SCI_UPPER_THRESHOLD = 1e12  # |x| >= umbral -> notación científica
SCI_LOWER_THRESHOLD = 1e-9  # |x| < umbral -> notación científica

LOG_LEVEL = os.getenv("CALCULATOR_LOG_LEVEL", "WARNING")
