"""
Scanning Interface Definitions.
"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Any

from ..support.interfaces import LexError

RuleId = int

class Token(NamedTuple):
	"""
	The unit of communication between scanner and parser.
	`start` and `stop` are offsets into the whole buffer, so they survive being
	handed along to error messages.
	"""
	kind: str
	semantic: Any
	start: int
	stop: int

	def span(self) -> slice: return slice(self.start, self.stop)

class Recognizer(ABC):
	"""
	A recognizer determines which rule matches but knows nothing about what the rules do.
	This interface captures the one operation required to execute the general scanning algorithm.
	"""

	@abstractmethod
	def recognize(self, text:str, cursor:int) -> tuple[int, Optional[RuleId]]:
		"""
		Find the end of the lexeme starting at `cursor` and the rule that applies to it.
		Return (cursor, None) if no rule matches a non-empty lexeme there.
		"""

class Bindings(ABC):

	@abstractmethod
	def on_match(self, yy, rule_id:RuleId):
		""" Delegate to whatever action is bound to the given rule. """

	def on_stuck(self, yy):
		""" If you override this to return normally, scanning will continue normally afterward. """
		raise LexError("No token can start with %r"%yy.match(), yy.slice())
