"""
Trees for the translator.

A parse tree is built from symbols in a ranked alphabet. Each symbol is a small
Python class with named, immutable fields. Every field is declared with the
category of thing it holds, and a multiplicity suffix borrowed from regular
expressions: nothing for exactly one, ? for optional, * or + for a tuple.
The built-in category "text" admits `str`, so leaves such as words and
identifiers need no wrapper class of their own.

Compiler passes are written as subclasses of TreePass, with one method per
symbol name. See `blatte.codegen` for the main example.
"""

import abc
from typing import NamedTuple

class Field(NamedTuple):
	name: str
	category: set
	multiplicity: str

	def admits(self, value) -> bool:
		if not self.multiplicity: return type(value) in self.category
		if self.multiplicity == '?': return value is None or type(value) in self.category
		if self.multiplicity in '*+':
			if not isinstance(value, tuple): return False
			if self.multiplicity == '+' and not value: return False
			return all(type(v) in self.category for v in value)
		raise ValueError(self.multiplicity)

class RankedAlphabet:
	"""
	A ranked alphabet is a couple (F,Arity) where F is a finite set and Arity is a mapping from F into N.
		-- TATA, page 15.

	Here every symbol also belongs to one or more categories, and the fields of
	later symbols refer to categories rather than to particular symbols.
	Categories are sets that keep growing as symbols join them, so a field may
	name a category whose members are declared later on.
	"""

	def __init__(self, *categories:str):
		assert all(c.isidentifier() for c in categories)
		self.__members = {c:set() for c in categories}
		self.__members['text'] = {str}
		self.__symbols = {}

	def __getitem__(self, name):
		return self.__symbols[name]

	def __field(self, name, declaration:str) -> Field:
		category, multiplicity = declaration, ''
		if declaration[-1] in '?*+': category, multiplicity = declaration[:-1], declaration[-1]
		return Field(name, self.__members[category], multiplicity)

	def symbol(self, name:str, /, *categories:str, **fields) -> type:
		""" Make, register, and return a new subclass of BaseTerm. Fields are declared as name='category' keywords. """
		assert name.isidentifier() and name not in self.__symbols, name  # Passes dispatch on this name.
		cls = type(name, (BaseTerm,), {
			'__slots__': tuple(fields),
			'_fields_': tuple(self.__field(f, d) for f, d in fields.items()),
		})
		self.__symbols[name] = cls
		for c in categories: self.__members[c].add(cls)
		return cls

class BaseTerm:
	"""
	Base class for the generated symbol types. Somewhere between a dataclass
	and a namedtuple: fields are positional, immutable, and compare structurally.
	"""
	__slots__ = ()
	_fields_: tuple

	def __init__(self, *args):
		if len(args) != len(self._fields_):
			raise TypeError("%s takes %d fields but got %d"%(self, len(self._fields_), len(args)))
		for field, value in zip(self._fields_, args):
			if __debug__ and not field.admits(value):
				raise TypeError("%s: field %r cannot hold %r"%(self, field.name, value))
			object.__setattr__(self, field.name, value)

	def __setattr__(self, key, value): raise TypeError("Terms are immutable")
	def __delattr__(self, item): raise TypeError("Terms are immutable")

	def __iter__(self):
		return (getattr(self, f.name) for f in self._fields_)

	def __str__(self):
		return '<%s/%d>'%(type(self).__name__, len(self._fields_))

	def __repr__(self):
		return "%s(%s)"%(type(self).__name__, ", ".join(map(repr, self)))

	def __eq__(self, other):
		return type(self) is type(other) and tuple(self) == tuple(other)

	def __hash__(self):
		return hash((type(self).__name__,) + tuple(self))

class TreePass(abc.ABC):
	"""
	A pass is callable with a term as its first argument. It calls the method named
	for the term's symbol, passing along the term and everything else unexamined.
	Methods recurse explicitly (by calling `self(...)`) wherever processing should continue.
	"""
	@abc.abstractmethod
	def _unhandled_(self, term, *args, **kwargs):
		""" Deal with unknown symbols here. """

	def __call__(self, term, *args, **kwargs):
		method = getattr(self, type(term).__name__, self._unhandled_)
		return method(term, *args, **kwargs)

class StrictPass(TreePass):
	def _unhandled_(self, term, *args, **kwargs):
		""" Strict passes must implement something for every symbol they are given. """
		raise RuntimeError("%s neglects to handle %s"%(type(self).__name__, term if isinstance(term, BaseTerm) else type(term)))
