"""
Recursive-descent parser for Blatte.

The parser reads exactly one expression from the front of its input and stops,
so a document is processed by calling it repeatedly on a shared `Cursor`.
It never looks past the end of the expression it returns: tokens come from a
lazy scanner, and the last token of any expression (a word, a variable, a
string, or a closing brace) is recognizable without lookahead.

Special forms are recognized by their keyword in the first position of a group.
The rest of each special form is parsed by a dedicated method that knows the
shape to expect, so most errors can be blamed on a specific token.
"""

import threading
from typing import Optional, Union, Iterator

from . import lexer, syntax
from .codegen import Generator
from .scanning.engine import Cursor
from .scanning.interface import Token
from .support.interfaces import ParseError

# These keywords are not identifiers, so they can only ever start a special form.
NOT_IDENTIFIERS = frozenset(['set!', 'let*'])

class Parser:
	"""
	A parser configuration: which lexical definition to scan with, and which
	code generator to hand finished trees to. It holds no per-call state,
	so one instance can serve any number of callers.

	To add a special form, subclass and extend SPECIAL_FORMS with a mapping from
	keyword to the name of a method taking (reader, keyword_token, open_brace_token).
	"""

	SPECIAL_FORMS = {
		'define': 'parse_define',
		'set!': 'parse_set',
		'if': 'parse_if',
		'and': 'parse_and_or',
		'or': 'parse_and_or',
		'cond': 'parse_cond',
		'while': 'parse_while',
		'lambda': 'parse_lambda',
		'let': 'parse_let',
		'let*': 'parse_let',
		'letrec': 'parse_let',
	}

	def __init__(self, *, lexemes=None, generator=None):
		if generator is None: generator = Generator()
		self.lexemes = lexer.LEXEMES if lexemes is None else lexemes
		self.generator = generator

	def read(self, subject:Union[str, Cursor]) -> Optional[syntax.Wrapped]:
		"""
		Parse the first expression in `subject` and return its tree.
		If `subject` is a Cursor, it advances past the expression on success.
		Returns None (and leaves the cursor alone) if no expression remains.
		"""
		cursor = Cursor(subject) if isinstance(subject, str) else subject
		reader = Reader(self, self.lexemes.scan(cursor.subject, at=cursor.offset))
		tree = reader.top_level()
		if tree is not None: cursor.offset = reader.consumed
		return tree

	def parse(self, subject:Union[str, Cursor]) -> Optional[str]:
		""" Parse the first expression in `subject` and return it translated to Python source. """
		tree = self.read(subject)
		if tree is None: return None
		return self.generator.program(tree)

	def each(self, subject:Union[str, Cursor]) -> Iterator[syntax.Wrapped]:
		""" Read successive expressions until only whitespace remains. """
		cursor = Cursor(subject) if isinstance(subject, str) else subject
		while True:
			tree = self.read(cursor)
			if tree is None: return
			yield tree

	def trailing(self, subject:Union[str, Cursor]) -> str:
		""" The whitespace left over once no expression remains, with comments and forgotten runs removed. """
		cursor = Cursor(subject) if isinstance(subject, str) else subject
		return Reader(self, self.lexemes.scan(cursor.subject, at=cursor.offset)).whitespace()

	############################################################################
	#  Special forms. Each is called just after its keyword has been consumed.
	############################################################################

	def parse_define(self, rd:"Reader", keyword:Token, brace:Token):
		ws, target = rd.next_significant()
		if target.kind == 'var':
			name = rd.identifier(target)
			return syntax.Define(name, rd.exactly_one(keyword, brace))
		if target.kind == '{':
			name_token = rd.expect_token('var', "Expected the name of the function being defined")
			name = rd.identifier(name_token)
			params = rd.parameters(target)
			body = rd.expressions_until_close(brace)
			return syntax.Define(name, syntax.Wrapped(ws, syntax.Lambda(name, params, body)))
		raise ParseError("define needs a \\variable or a {\\name parameters...} group", target.span())

	def parse_set(self, rd:"Reader", keyword:Token, brace:Token):
		ws, target = rd.next_significant()
		if target.kind != 'var':
			raise ParseError("set! needs a \\variable to assign", target.span())
		return syntax.Assign(rd.identifier(target), rd.exactly_one(keyword, brace))

	def parse_if(self, rd:"Reader", keyword:Token, brace:Token):
		operands = rd.expressions_until_close(brace)
		if len(operands) < 2:
			raise ParseError("if needs at least a test and a consequence", rd.span_from(brace))
		return syntax.If(operands[0], operands[1], operands[2:])

	def parse_and_or(self, rd:"Reader", keyword:Token, brace:Token):
		operands = rd.expressions_until_close(brace)
		if not operands:
			raise ParseError("%s needs at least one operand"%keyword.semantic, rd.span_from(brace))
		symbol = syntax.And if keyword.semantic == 'and' else syntax.Or
		return symbol(operands)

	def parse_cond(self, rd:"Reader", keyword:Token, brace:Token):
		clauses = []
		while True:
			ws, token = rd.next_significant()
			if token.kind == '}': return syntax.Cond(tuple(clauses))
			if token.kind != '{':
				raise ParseError("Each cond clause must be a {test consequence...} group", token.span())
			items = rd.expressions_until_close(token)
			if not items:
				raise ParseError("A cond clause needs at least a test", rd.span_from(token))
			clauses.append(syntax.Clause(items[0], items[1:]))

	def parse_while(self, rd:"Reader", keyword:Token, brace:Token):
		operands = rd.expressions_until_close(brace)
		if not operands:
			raise ParseError("while needs a test", rd.span_from(brace))
		return syntax.While(operands[0], operands[1:])

	def parse_lambda(self, rd:"Reader", keyword:Token, brace:Token):
		ws, token = rd.next_significant()
		if token.kind != '{':
			raise ParseError("lambda needs a {parameters...} group", token.span())
		params = rd.parameters(token)
		return syntax.Lambda(None, params, rd.expressions_until_close(brace))

	def parse_let(self, rd:"Reader", keyword:Token, brace:Token):
		kind = keyword.semantic
		ws, token = rd.next_significant()
		if token.kind != '{':
			raise ParseError("%s needs a {{\\variable value}...} group"%kind, token.span())
		bindings, seen = [], set()
		while True:
			ws, pair = rd.next_significant()
			if pair.kind == '}': break
			if pair.kind != '{':
				raise ParseError("Each binding must look like {\\variable value}", pair.span())
			ws, var = rd.next_significant()
			if var.kind != 'var':
				raise ParseError("Each binding must look like {\\variable value}", var.span())
			name = rd.identifier(var)
			if name in seen and kind != 'let*':
				raise ParseError("%r is bound twice"%name, var.span())
			seen.add(name)
			values = rd.expressions_until_close(pair)
			if len(values) != 1:
				raise ParseError("Each binding must look like {\\variable value}", rd.span_from(pair))
			bindings.append(syntax.Binding(name, values[0]))
		return syntax.Let(kind, tuple(bindings), rd.expressions_until_close(brace))

class Reader:
	"""
	The state of one parse call: a token stream with a single token of push-back,
	plus the furthest extent consumed so far.
	"""

	def __init__(self, parser:Parser, tokens):
		self.parser = parser
		self.__tokens = iter(tokens)
		self.__pending = None
		self.__last = None
		self.consumed = None

	def peek(self) -> Optional[Token]:
		if self.__pending is None:
			self.__pending = next(self.__tokens, None)
		return self.__pending

	def take(self) -> Optional[Token]:
		token = self.peek()
		self.__pending = None
		if token is not None:
			self.__last = token
			self.consumed = token.stop
		return token

	def end_span(self) -> slice:
		at = 0 if self.__last is None else self.__last.stop
		return slice(at, at)

	def span_from(self, token:Token) -> slice:
		""" From the start of `token` to the end of what has been consumed. """
		return slice(token.start, max(token.stop, self.consumed))

	def whitespace(self) -> str:
		"""
		Skip whitespace, returning it so it can be wrapped around whatever comes next.
		A forget-whitespace marker throws away everything accumulated so far.
		"""
		pieces = []
		while True:
			token = self.peek()
			if token is None: break
			if token.kind == 'ws': pieces.append(token.semantic)
			elif token.kind == 'forget': pieces.clear()
			else: break
			self.take()
		return ''.join(pieces)

	def next_significant(self) -> tuple[str, Token]:
		""" Skip whitespace and take the next token, which had better exist. """
		ws = self.whitespace()
		token = self.take()
		if token is None: raise ParseError("Unexpected end of input", self.end_span())
		return ws, token

	def expect_token(self, kind, message) -> Token:
		ws, token = self.next_significant()
		if token.kind != kind: raise ParseError(message, token.span())
		return token

	def identifier(self, token:Token) -> str:
		name = token.semantic
		if name in NOT_IDENTIFIERS:
			raise ParseError("%r is a keyword, not a variable"%name, token.span())
		return name

	def top_level(self) -> Optional[syntax.Wrapped]:
		ws = self.whitespace()
		token = self.take()
		if token is None: return None
		return syntax.Wrapped(ws, self.form(token))

	def form(self, token:Token, *, argument=False):
		""" Build the form that starts with `token`, which has just been consumed. """
		kind = token.kind
		if kind in ('word', 'string'): return syntax.Scalar(token.semantic)
		if kind == 'var': return syntax.Variable(self.identifier(token))
		if kind == '{': return self.group(token)
		if kind == '}': raise ParseError("Unmatched }", token.span())
		if kind == 'named_arg':
			if not argument: raise ParseError("Named argument outside of a function call", token.span())
			ws = self.whitespace()
			value = self.take()
			if value is None or value.kind == '}':
				raise ParseError("Named argument \\%s= needs a value"%token.semantic, token.span())
			return syntax.NamedArg(token.semantic, syntax.Wrapped(ws, self.form(value)))
		if kind in ('named_param', 'rest_param'):
			raise ParseError("Parameter declaration outside of a parameter list", token.span())
		if kind == 'bad_escape':
			raise ParseError("Identifiers must start with a letter; to get a literal backslash, write \\\\", token.span())
		raise ParseError("Unexpected %s"%kind, token.span())

	def group(self, brace:Token):
		ws = self.whitespace()
		head = self.peek()
		if head is not None and head.kind == 'var' and head.semantic in self.parser.SPECIAL_FORMS:
			self.take()
			method = getattr(self.parser, self.parser.SPECIAL_FORMS[head.semantic])
			return method(self, head, brace)
		items = []
		while True:
			token = self.take()
			if token is None: raise ParseError("Unmatched {", brace.span())
			if token.kind == '}': return syntax.Group(tuple(items))
			items.append(syntax.Wrapped(ws, self.form(token, argument=bool(items))))
			ws = self.whitespace()

	def expressions_until_close(self, brace:Token) -> tuple:
		""" Read wrapped expressions up to the closing brace that matches `brace`. """
		items = []
		while True:
			ws = self.whitespace()
			token = self.take()
			if token is None: raise ParseError("Unmatched {", brace.span())
			if token.kind == '}': return tuple(items)
			items.append(syntax.Wrapped(ws, self.form(token)))

	def exactly_one(self, keyword:Token, brace:Token):
		operands = self.expressions_until_close(brace)
		if len(operands) != 1:
			raise ParseError("%s takes exactly one value"%keyword.semantic, self.span_from(brace))
		return operands[0]

	def parameters(self, brace:Token) -> tuple:
		""" Read parameter declarations up to the closing brace that matches `brace`. """
		params, seen = [], set()
		while True:
			ws, token = self.next_significant()
			if token.kind == '}': return tuple(params)
			if token.kind == 'var': kind, name = syntax.POSITIONAL, self.identifier(token)
			elif token.kind == 'named_param': kind, name = syntax.NAMED, token.semantic
			elif token.kind == 'rest_param': kind, name = syntax.REST, token.semantic
			else: raise ParseError("Expected a parameter: \\name, \\=name, or \\&name", token.span())
			if params and params[-1].kind == syntax.REST:
				message = "Only one rest parameter is allowed" if kind == syntax.REST else "The rest parameter must come last"
				raise ParseError(message, token.span())
			if name in seen:
				raise ParseError("Parameter %r is declared twice"%name, token.span())
			seen.add(name)
			params.append(syntax.Param(kind, name))

_default = None
_default_lock = threading.Lock()

def default_parser() -> Parser:
	""" A shared Parser with the standard configuration, built on first use. """
	global _default
	with _default_lock:
		if _default is None: _default = Parser()
		return _default
