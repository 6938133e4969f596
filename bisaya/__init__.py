# Bisaya++ language package
# This package provides a tokenizer, parser and tree-walking interpreter for Bisaya++.
from .interpreter import run_program, Interpreter
from .errors import BisayaError
from .lexer import tokenize
from .parser import parse, parse_program

__all__ = [
    'run_program',
    'Interpreter',
    'BisayaError',
    'tokenize',
    'parse',
    'parse_program',
]
