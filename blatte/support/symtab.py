"""
The code generator needs a symbol table to decide what Python name a Blatte
variable mention turns into.

Blatte has two sorts of variables:

* global variables, created by `\\define` (or just mentioned and assumed to be
  supplied by whoever runs the code), and
* lexical variables, created by `\\let`, `\\let*`, `\\letrec` and by the
  parameter lists of `\\lambda`.

A lexical variable is visible within the body of the form that binds it, and
an inner binding of the same name shadows an outer one. That is precisely a
chain of nested namespaces. Each namespace also records its "place", which for
the generator is the Python function (or module) in which the variable lives.
That matters because assigning to a variable from a *different* Python function
needs a `nonlocal` or `global` declaration.

A mention that is not found anywhere in the chain refers to a global.
"""

from typing import Optional, Generic, TypeVar

class SymbolAlreadyExists(KeyError):
	pass

T = TypeVar("T")

class NameSpace(Generic[T]):
	"""
	NameSpace bears some resemblance to chainmap with a few extra attributes.
	The "local" is the set of names defined in this space.
	The "place" is where the namespace "lives"; the generator uses the frame of Python code.
	The "parent" works like a static link.
	"""
	def __init__(self, *, place, parent:Optional["NameSpace[T]"]=None):
		self.local : dict[str, T] = {}
		self.place = place
		self.parent : Optional[NameSpace[T]] = parent

	def find(self, key) -> tuple[Optional[T], Optional["NameSpace[T]"]]:
		"""
		Return both the symbol and its host namespace,
		so the caller can tell which frame a variable lives in.
		In case the symbol is not found, this returns (None, None) for easy procedural testing.
		"""
		space = self
		while space is not None:
			if key in space.local: return space.local[key], space
			space = space.parent
		return None, None

	def __contains__(self, key):
		return self.find(key)[1] is not None

	def __setitem__(self, key, value:T):
		if key in self.local:
			raise SymbolAlreadyExists(key)
		else:
			self.local[key] = value

	def new_child(self, place=None) -> "NameSpace[T]":
		""" Return a subordinate name-space linked to this one, by default living in the same place. """
		return NameSpace(place=self.place if place is None else place, parent=self)
