"""
The lexical structure of Blatte.

Blatte has three metacharacters: \\ { }. Everything else in a document is either
whitespace or part of a word. A backslash introduces nearly everything
interesting: variables, parameters, named arguments, string literals, comments,
the forget-whitespace marker, and escaped metacharacters.

Tokens are plain `Token` tuples; see the table in `LEXEMES` below for the kinds.
Whitespace is NOT ignored here: the parser needs every run of it.
"""

import re

from .scanning import miniscan
from .support.interfaces import LexError

LEXEMES = miniscan.Definition('Blatte')

LEXEMES.let('ident', r'[A-Za-z][A-Za-z0-9_]*')
LEXEMES.let('wordchar', r'[^\s\\{}]|\\[\\{}]')

def unescape(text:str) -> str:
	""" A backslash means "the next character, literally". """
	return re.sub(r'\\(.)', r'\1', text, flags=re.DOTALL)

LEXEMES.token('ws', r'\s+')
LEXEMES.token_map('word', r'(?:{wordchar})+', unescape)
LEXEMES.ignore(r'\\;[^\r\n]*')

@LEXEMES.on(r'[{}]')
def brace(yy):
	yy.token(yy.match())

@LEXEMES.on(r'\\/')
def forget_whitespace(yy):
	yy.token('forget')

@LEXEMES.on(r'\\"(?:[^\\]|\\[^"])*\\"')
def string(yy):
	yy.token('string', unescape(yy.match()[2:-2]))

@LEXEMES.on(r'\\"')
def unterminated_string(yy):
	# The complete-string rule is always longer when it matches at all.
	raise LexError("Unterminated string", slice(yy.left, yy.right))

# Alternation is ordered, so the keywords must come before the general case.
LEXEMES.token_map('var', r'\\set!|\\let\*|\\{ident}', lambda text:text[1:])
LEXEMES.token_map('named_arg', r'\\{ident}=', lambda text:text[1:-1])
LEXEMES.token_map('named_param', r'\\={ident}', lambda text:text[2:])
LEXEMES.token_map('rest_param', r'\\&{ident}', lambda text:text[2:])

# A backslash before anything else is nonsense, but the parser can explain why better than we can.
LEXEMES.token_map('bad_escape', r'\\[\s\S]', lambda text:text[1:], rank=-1)

@LEXEMES.on(r'\\\Z', rank=1)
def dangling_backslash(yy):
	raise LexError("Backslash at end of input", slice(yy.left, yy.right))
