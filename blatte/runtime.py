"""
What translated Blatte programs need at run time, and the utilities for
working with the values they produce.

Values are trees: a `Ws` wrapper pairs a value with the whitespace that
preceded it in the source; lists and tuples are sequences; anything else is a
scalar. `Procedure` objects are scalars as far as these utilities are concerned:
nothing here ever looks inside one.
"""

from typing import Callable, Optional

RESULT_NAME = '_result'

class Ws:
	""" An immutable (whitespace, value) pair. """
	__slots__ = ('ws', 'obj')

	def __init__(self, ws:str, obj):
		object.__setattr__(self, 'ws', ws)
		object.__setattr__(self, 'obj', obj)

	def __setattr__(self, key, value):
		raise AttributeError("Ws objects are immutable")

	def __eq__(self, other):
		return isinstance(other, Ws) and self.ws == other.ws and self.obj == other.obj

	def __hash__(self):
		return hash((Ws, self.ws, _hashable(self.obj)))

	def __repr__(self):
		return "Ws(%r, %r)"%(self.ws, self.obj)

def _hashable(obj):
	return tuple(map(_hashable, obj)) if isinstance(obj, list) else obj

def is_sequence(obj) -> bool:
	return isinstance(obj, (list, tuple))

def wrapws(ws:str, obj) -> Ws:
	return Ws(ws, obj)

def unwrapws(obj):
	""" Strip off every layer of whitespace wrapper. """
	while isinstance(obj, Ws): obj = obj.obj
	return obj

def wsof(obj) -> str:
	""" The whitespace of the outermost wrapper, if there is one. """
	return obj.ws if isinstance(obj, Ws) else ''

def _walk(obj, callback, ws):
	"""
	Returns (result, consumed). The forced whitespace `ws` goes to each scalar in
	turn until some callback consumes it; after that, scalars get their own.
	"""
	if isinstance(obj, Ws):
		return _walk(obj.obj, callback, obj.ws if ws is None else ws)
	if is_sequence(obj):
		result, consumed = None, False
		for item in obj:
			r2, c2 = _walk(item, callback, None if consumed else ws)
			if not consumed: result, consumed = r2, c2
		return result, consumed
	result = callback(ws, obj)
	return result, result is not None and result is not False

def traverse(obj, callback:Callable, ws:Optional[str]=None):
	"""
	Visit each scalar in `obj`, depth first and left to right, calling
	`callback(ws, scalar)`, where `ws` is the whitespace that belongs in front of it.

	If `ws` is given, it overrides the whitespace of the first scalar to *consume*
	it: that is, the first whose callback returns anything but None or False.
	Every scalar after that gets the whitespace of its own nearest wrapper.
	Returns the first consumed result, or None if nothing consumed.
	"""
	result, consumed = _walk(obj, callback, ws)
	return result if consumed else None

def flatten(obj, ws:Optional[str]=None) -> str:
	""" Render a value tree as text. """
	pieces = []
	def append(ws, scalar):
		if ws is not None: pieces.append(ws)
		if scalar is not None: pieces.append(str(scalar))
		return True
	traverse(obj, append, ws)
	return ''.join(pieces)

def true(obj) -> bool:
	"""
	Blatte truth: after unwrapping, None, False, zero, the empty string, the
	string "0", and empty sequences are false. Everything else is true, including
	a non-empty sequence whatever it holds, and also the string "0.0".
	"""
	obj = unwrapws(obj)
	if obj is None or obj is False: return False
	if is_sequence(obj): return len(obj) > 0
	if isinstance(obj, str): return obj not in ('', '0')
	if isinstance(obj, (int, float)): return obj != 0
	return True

def quote(text:str) -> str:
	""" Write `text` as Blatte source that reads back as the same single word or string. """
	if text == '': return '\\"\\"'
	if any(c.isspace() for c in text):
		return '\\"' + text.replace('\\', '\\\\') + '\\"'
	return ''.join('\\'+c if c in '\\{}' else c for c in text)

class CallError(TypeError):
	""" Raised by translated code when the arguments don't suit the thing called. """

class Procedure:
	"""
	A callable Blatte value. The function is called with a dictionary of
	named arguments first, then the positional arguments.
	"""
	__slots__ = ('function', 'name')

	def __init__(self, function:Callable, name:Optional[str]=None):
		self.function = function
		self.name = name

	def __call__(self, named:dict, *args):
		return self.function(named, *args)

	def __repr__(self):
		return "<Procedure %s>"%(self.name or 'anonymous')

	__str__ = __repr__

def is_procedure(obj) -> bool:
	return isinstance(obj, Procedure)

def procedure(fn:Callable) -> Procedure:
	"""
	Decorator: make an ordinary Python function callable from Blatte.
	Named arguments arrive as keyword arguments.
	"""
	return Procedure(lambda named, *args: fn(*args, **named), fn.__name__)

def unpack(args:tuple, count:int, has_rest:bool, name:Optional[str]=None) -> tuple:
	"""
	Distribute positional arguments over `count` positional parameters.
	With a rest parameter, the surplus comes along as one more element: a list.
	"""
	if len(args) < count or (len(args) > count and not has_rest):
		raise CallError("%s takes %s%d positional argument(s) but got %d"%(
			name or 'anonymous function', 'at least ' if has_rest else '', count, len(args),
		))
	if has_rest: return tuple(args[:count]) + (list(args[count:]),)
	return tuple(args)

def evaluate(source:str, namespace:Optional[dict]=None):
	""" Run a translated program and return its value. Definitions land in `namespace`. """
	if namespace is None: namespace = {}
	exec(compile(source, '<blatte>', 'exec'), namespace)
	return namespace[RESULT_NAME]
