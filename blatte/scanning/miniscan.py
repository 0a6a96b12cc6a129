""" Hook regular expression patterns up to method calls on a scanner object. """

import re

from .interface import Bindings, Recognizer
from .engine import IterableScanner

class Rule:
	__slots__ = ('pattern', 'rank', 'action')
	def __init__(self, pattern, rank, action):
		self.pattern, self.rank, self.action = pattern, rank, action

class Definition(Bindings, Recognizer):
	"""
	A scanner definition is an ordered collection of pattern/action rules.

	Patterns are Python regular expressions. A named subexpression defined with
	`let` may be mentioned as {name} in later patterns. (Braces around anything
	not so defined are left alone, so `[{}]` still means what it says.)

	Which rule wins? The highest ranked rules that match; among those, the
	longest match; among those, whichever was defined first. A rule that can
	only match the empty string never wins.
	"""
	def __init__(self, name="MiniScan Definition"):
		self.name = name
		self.__rules = []
		self.__subex = {}
		self.__awaiting_action = False

	def scan(self, text:str, *, at:int=0) -> IterableScanner:
		if self.__awaiting_action: raise AssertionError('You forgot to provide the action for the final pattern!')
		return IterableScanner(text, self, self, at=at)

	def let(self, name:str, pattern:str):
		assert name.isidentifier() and name not in self.__subex, name
		self.__subex[name] = self.__expand(pattern)

	def __expand(self, pattern:str) -> str:
		def substitute(match):
			name = match.group(1)
			return '(?:%s)'%self.__subex[name] if name in self.__subex else match.group(0)
		return re.sub(r'\{(\w+)\}', substitute, pattern)

	def token(self, kind:str, pattern:str, *, rank=0):
		""" This says every member of the pattern has token kind=kind and semantic=matched text. """
		@self.on(pattern, rank=rank)
		def action(yy:IterableScanner): yy.token(kind, yy.match())

	def token_map(self, kind:str, pattern:str, fn:callable, *, rank=0):
		""" Every member of the pattern has token kind=kind and semantic=fn(matched text). """
		@self.on(pattern, rank=rank)
		def action(yy:IterableScanner): yy.token(kind, fn(yy.match()))

	def ignore(self, pattern:str, *, rank=0):
		""" Tell Scanner to ignore what matches the pattern. """
		@self.on(pattern, rank=rank)
		def action(yy:IterableScanner): pass

	def on(self, pattern:str, *, rank=0):
		"""
		For instance:
		@scanner_definition.on(r'[A-Za-z_]+')
		def word(yy): yy.token('word', yy.match())
		"""
		if self.__awaiting_action: raise AssertionError('You forgot to provide the action for the previous pattern!')
		self.__awaiting_action = True
		compiled = re.compile(self.__expand(pattern))
		def decorator(fn):
			assert self.__awaiting_action
			self.__awaiting_action = False
			assert callable(fn)
			self.__rules.append(Rule(compiled, rank, fn))
			return fn
		return decorator

	def recognize(self, text:str, cursor:int):
		best_key, best_rule = None, None
		for rule_id, rule in enumerate(self.__rules):
			m = rule.pattern.match(text, cursor)
			if m is None or m.end() == cursor: continue
			key = (rule.rank, m.end())
			if best_key is None or key > best_key:
				best_key, best_rule = key, rule_id
		if best_rule is None: return cursor, None
		return best_key[1], best_rule

	def on_match(self, yy:IterableScanner, rule_id:int):
		self.__rules[rule_id].action(yy)
