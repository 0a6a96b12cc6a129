"""
Whole documents. A Blatte document is a sequence of top-level expressions;
each is translated and run on its own, in order, sharing one namespace so that
definitions made early in the document are visible later on.
"""

from typing import Iterator, Optional

from . import runtime
from .parser import Parser, default_parser
from .scanning.engine import Cursor

def translate(text:str, parser:Optional[Parser]=None) -> Iterator[tuple[str, str]]:
	""" Yield (source text, Python program) for each top-level expression. """
	if parser is None: parser = default_parser()
	cursor = Cursor(text)
	while True:
		start = cursor.offset
		tree = parser.read(cursor)
		if tree is None: return
		yield text[start:cursor.offset], parser.generator.program(tree)

def render(text:str, namespace:Optional[dict]=None, parser:Optional[Parser]=None) -> str:
	""" Run every expression in the document and return the text of the results. """
	if parser is None: parser = default_parser()
	if namespace is None: namespace = {}
	cursor = Cursor(text)
	pieces = []
	for tree in parser.each(cursor):
		value = runtime.evaluate(parser.generator.program(tree), namespace)
		pieces.append(runtime.flatten(value))
	pieces.append(parser.trailing(cursor))
	return ''.join(pieces)
