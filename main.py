"""Punto de entrada de la calculadora científica."""

import sys

from calculator_cli import main_entry


def main():
    return main_entry()


if __name__ == "__main__":
    sys.exit(main())
