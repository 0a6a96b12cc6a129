"""
The generic scanning algorithm, and the cursor it reads from.
"""
from .interface import Recognizer, Bindings, Token

class Cursor:
	"""
	A read position within a buffer that several parse calls may share.

	Each successful parse moves the offset past the expression it consumed,
	so repeated calls consume successive expressions from one stream.
	From the caller's point of view, the consumed text is gone from the front:
	`text` returns only what remains. The original buffer is kept around so that
	error positions stay meaningful relative to the whole document.
	"""
	def __init__(self, subject:str, offset:int=0):
		if not isinstance(subject, str): raise TypeError(type(subject))
		self.subject = subject
		self.offset = offset

	@property
	def text(self) -> str:
		""" Whatever remains to be consumed. """
		return self.subject[self.offset:]

	def is_exhausted(self) -> bool:
		return self.offset >= len(self.subject)

	def __repr__(self):
		return "<Cursor at %d of %d>"%(self.offset, len(self.subject))

class Scanner:
	"""
	This is the standard generic rule-driven scanner.
	It asks the recognizer for the next lexeme and tells the bindings about it.
	The matched region is always self.left up to self.right.
	"""

	def __init__(self, text:str, recognizer:Recognizer, bindings:Bindings, at=0):
		self.__text = text
		self.__size = len(text)
		self.__recognizer = recognizer
		self.__bindings = bindings
		self.left = self.right = at

	def scan_one_item(self):
		cursor = self.left = self.right
		self.right, rule_id = self.__recognizer.recognize(self.__text, cursor)
		if rule_id is None:
			self.right = cursor + 1
			self.__bindings.on_stuck(self)
		else:
			self.__bindings.on_match(self, rule_id)

	def has_more(self):
		return self.right < self.__size

	def slice(self):
		""" Return a slice-object corresponding to the extent of matched text. """
		return slice(self.left, self.right)
	def match(self):
		""" Return the actual matched text """
		return self.__text[self.left:self.right]

class IterableScanner(Scanner):
	"""
	It is convenient that iterating over a scanner should cause it to yield tokens.
	Scan-actions call yy.token(...) and this object wraps that into an iterable.

	Iteration is lazy: a consumer that stops pulling tokens stops the scan, which
	is how the parser reads one expression from the front of a longer buffer
	without looking at the rest.
	"""

	def __init__(self, text:str, recognizer:Recognizer, bindings:Bindings, at=0):
		super().__init__(text, recognizer, bindings, at)
		self.__buffer = []

	def __iter__(self):
		while self.has_more():
			self.scan_one_item()
			yield from self.__buffer
			self.__buffer.clear()

	def token(self, kind: str, semantic=None):
		"""
		During scan rule invocation, call this method with tokens for the
		scanner to yield once it gets control back. The token's extent is
		the current match.
		"""
		assert kind is not None
		self.__buffer.append(Token(kind, semantic, self.left, self.right))
