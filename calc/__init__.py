"""Calc - string-based expression calculator.

Main namespace package containing all calculator submodules:
- calc.parser: Expression scanning, parsing, evaluation and tree printing
- calc.repl: Interactive session, history and command line
- calc.core: Configuration, logging and errors
"""

__version__ = "0.1.0"

__all__ = []
