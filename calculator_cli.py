"""Interfaz de línea de comandos de la calculadora.

Uso:
    calculator -e "2^3^2"
    calculator -e "sin(30)" --mode deg --format json
    calculator -e "ans*2" --ans 21
    calculator                # modo interactivo
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

from calculator_config import DEFAULT_ANGLE_MODE, LOG_LEVEL, VERSION
from calculator_engine import CalculatorEngine, format_expression, format_number
from calculator_logging import get_logger, setup_logging
from calculator_types import AngleMode, EvalResult

logger = get_logger("cli")

PROMPT = "> "
HELP_TEXT = """\
Escribe una expresión y pulsa Enter. Comandos:
  :deg / :rad   cambia el modo angular
  :mode         muestra el modo angular actual
  :clear        borra ans
  :help         muestra esta ayuda
  :quit         sale"""


def _render(result: EvalResult, output_format: str) -> str:
    if output_format == "json":
        data = result.to_dict()
        if result.ok:
            data["display"] = format_number(result.value)
        return json.dumps(data, ensure_ascii=False)
    if result.ok:
        return format_number(result.value)
    return f"Error: {result.error}"


def run_once(engine: CalculatorEngine, expression: str, output_format: str, out: TextIO) -> int:
    result = engine.evaluate_result(expression)
    print(_render(result, output_format), file=out)
    return 0 if result.ok else 1


def repl(engine: CalculatorEngine, output_format: str, stdin: TextIO, out: TextIO) -> int:
    """Bucle interactivo; ans se conserva entre líneas."""
    interactive = stdin.isatty()
    if interactive:
        print(f"calculadora {VERSION} (modo {engine.angle_mode.value}) - :help para ayuda", file=out)

    while True:
        if interactive:
            print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            break
        line = line.strip()
        if not line:
            continue

        if line.startswith(":"):
            command = line[1:].lower()
            if command in ("quit", "exit", "q"):
                break
            if command in ("deg", "rad"):
                engine.angle_mode = command
                print(f"mode: {engine.angle_mode.value}", file=out)
            elif command == "mode":
                print(f"mode: {engine.angle_mode.value}", file=out)
            elif command == "clear":
                engine.clear()
                print("ans cleared", file=out)
            elif command == "help":
                print(HELP_TEXT, file=out)
            else:
                print(f"Error: unknown command: {line}", file=out)
            continue

        logger.info("Input: %s", format_expression(line))
        print(_render(engine.evaluate_result(line), output_format), file=out)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calculator", description="Calculadora científica")
    parser.add_argument("-e", "--eval", dest="expression", type=str, help="Evalúa una expresión y sale")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in AngleMode],
        default=DEFAULT_ANGLE_MODE,
        help="Modo angular (por defecto: %(default)s)",
    )
    parser.add_argument("--ans", type=float, default=None, help="Valor inicial de ans")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["human", "json"],
        default="human",
        help="Formato de salida",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Nivel de logging",
    )
    parser.add_argument("--log-file", type=str, help="Escribe los logs en un archivo")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main_entry(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        engine = CalculatorEngine(angle_mode=args.mode, ans=args.ans)
    except ValueError as exc:
        parser.error(str(exc))

    if args.expression is not None:
        return run_once(engine, args.expression, args.output_format, sys.stdout)
    return repl(engine, args.output_format, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main_entry())
