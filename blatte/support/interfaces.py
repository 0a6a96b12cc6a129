"""
This file aggregates the exception types which the Blatte translator deals in.

Every complaint about source text is localized: it carries a `slice` into the
buffer that was being read. The slice is always relative to the start of the
*whole* buffer, even when parsing resumed from a cursor somewhere in the middle,
so the caller can hand it straight to a `SourceText` for a polite error display.

Problems that only show up when generated code runs (undefined variables, wrong
number of arguments) are not language errors in this sense. They belong to
whoever runs the code. See `blatte.runtime.CallError`.
"""

from typing import Optional

from .failureprone import SourceText

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """
	phase = 'translating'

	def __init__(self, message:str, span:Optional[slice]=None):
		super().__init__(message, span)
		self.message, self.span = message, span

	@property
	def position(self) -> Optional[int]:
		return None if self.span is None else self.span.start

	def __str__(self):
		if self.span is None: return self.message
		return "%s (at offset %d)"%(self.message, self.span.start)

	def row_col(self, text:str):
		""" Return the (1-based) line and (0-based) column where the trouble starts. """
		return SourceText(text).find_row_col(self.position)

	def complaint(self, source:SourceText) -> str:
		if self.span is None: return "Error while %s: %s"%(self.phase, self.message)
		return source.complaint(self.span, self.message)

class ParseError(LanguageError):
	"""
	The text does not form a valid Blatte expression:
	unbalanced braces, a malformed special form, a bad identifier, and the like.
	"""
	phase = 'parsing'

class LexError(ParseError):
	"""
	The scanner got stuck: an unterminated string literal, or a backslash with nothing after it.
	It's a kind of ParseError, since nobody calling `parse(...)` cares which layer noticed.
	"""
	phase = 'scanning'

class CodeGenError(LanguageError):
	"""
	The generator was handed a tree it has no template for.
	If the parser is doing its job, you should never see one of these.
	"""
	phase = 'generating code'
