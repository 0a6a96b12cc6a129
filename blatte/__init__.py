r"""
Blatte: a markup language with three metacharacters, translated to Python.

	>>> import blatte
	>>> program = blatte.parse(r"{\if 1 yes no}")
	>>> blatte.flatten(blatte.evaluate(program))
	'yes'

`parse` reads the first expression of its input and returns a complete Python
program; give it a `Cursor` to work through a longer document one expression
at a time. See `blatte.document` for handling whole documents in one go.
"""

from typing import Optional, Union

from .parser import Parser, default_parser
from .codegen import Generator
from .scanning.engine import Cursor
from .support.interfaces import LanguageError, ParseError, LexError, CodeGenError
from .runtime import (
	Ws, Procedure, procedure, CallError, evaluate,
	traverse, flatten, wrapws, unwrapws, wsof, true, quote,
)

def parse(subject:Union[str, Cursor]) -> Optional[str]:
	""" Translate the first expression in `subject` to Python, or return None if there is none. """
	return default_parser().parse(subject)
