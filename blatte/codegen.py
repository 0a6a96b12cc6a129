"""
Translate Blatte trees into Python source text.

Every Blatte expression is an expression in spirit, but Python draws a hard line
between expressions and statements, and Blatte has loops, assignments and local
variables. So each method of the generator emits whatever statements it needs
into a Block and returns a Python *expression* (a literal, a name, or a small
side-effect-free construction) for the value. Anything with a side effect is
computed into a temporary first.

The generated module looks like:

	import blatte.runtime as _rt
	def _program():
		global <whatever the expression defines>
		...statements...
		return <expression>
	_result = _program()

Names:
	Blatte globals keep their own names, except that Python keywords get a `_kw_` prefix.
	Lexical variables (let-family bindings and parameters) become `_v<n>_<name>`.
	Temporaries are `_t<n>` and generated functions are `_f<n>`.
Blatte identifiers must start with a letter, so none of these can collide with a source name.

Every generated function takes the named-argument dictionary first and the
positional arguments after it. That's the calling convention; the standard
library of built-in functions must follow it too.
"""

import itertools, keyword, re

from . import syntax
from .runtime import RESULT_NAME
from .support import trees
from .support.symtab import NameSpace
from .support.interfaces import CodeGenError

INDENT = '\t'

def global_name(name:str) -> str:
	""" The Python name of a Blatte global variable. Collaborators use this to pre-populate a namespace. """
	return '_kw_'+name if keyword.iskeyword(name) else name

_SETTLED = re.compile(r"_t\d+|'[^'\\]*'|\[\]")

def is_settled(code:str) -> bool:
	""" Is this expression immune to later side effects? (Temporaries are never reassigned once filled.) """
	return _SETTLED.fullmatch(code) is not None

class Block:
	"""
	A place to put statements. Lines are (depth, text) pairs; `inner()` gives a
	view one level deeper that shares the same lines, while a fresh Block has
	lines of its own that can later be `absorb`ed somewhere else.
	"""
	def __init__(self, lines=None, depth=0):
		self.lines = [] if lines is None else lines
		self.depth = depth

	def emit(self, text:str):
		self.lines.append((self.depth, text))

	def inner(self) -> "Block":
		return Block(self.lines, self.depth+1)

	def absorb(self, other:"Block"):
		self.lines.extend((self.depth + d, text) for d, text in other.lines)

	def mark(self) -> int:
		return len(self.lines)

	def render(self) -> list[str]:
		return [INDENT*d + text for d, text in self.lines]

class Frame:
	""" One generated Python function: the outermost one, or the body of a lambda. """
	def __init__(self, parent:"Frame"=None):
		self.parent = parent
		# Generated names are numbered per program, so nested frames share the count.
		self.counter = itertools.count(1) if parent is None else parent.counter
		self.global_names = set()
		self.nonlocal_names = set()

	def declarations(self, block:Block):
		if self.global_names: block.emit('global '+', '.join(sorted(self.global_names)))
		if self.nonlocal_names: block.emit('nonlocal '+', '.join(sorted(self.nonlocal_names)))

class Generator(trees.StrictPass):
	"""
	Each method is named for a symbol in `blatte.syntax` and takes (node, block, scope).
	The scope is a NameSpace mapping Blatte names to Python names, whose place is the current Frame.
	"""

	def __init__(self, *, runtime:str='blatte.runtime'):
		self.runtime = runtime

	def program(self, tree:syntax.Wrapped) -> str:
		"""
		Translate one top-level expression into a complete Python module.
		The work happens inside a function, so that temporaries and lexical variables
		stay out of the namespace the module runs in; only definitions land there.
		"""
		frame, body = Frame(), Block()
		value = self(tree, body, NameSpace(place=frame))
		body.emit('return %s'%value)
		block = Block()
		block.emit('import %s as _rt'%self.runtime)
		block.emit('def _program():')
		frame.declarations(block.inner())
		block.inner().absorb(body)
		block.emit('%s = _program()'%RESULT_NAME)
		return '\n'.join(block.render()) + '\n'

	def _unhandled_(self, node, *args, **kwargs):
		raise CodeGenError("No translation for %s"%(node if isinstance(node, trees.BaseTerm) else type(node)))

	def fresh(self, prefix:str, scope:NameSpace) -> str:
		return "%s%d"%(prefix, next(scope.place.counter))

	def temp(self, scope:NameSpace) -> str: return self.fresh('_t', scope)

	def spill(self, code:str, block:Block, scope:NameSpace) -> str:
		""" Evaluate `code` now, keeping the value in a temporary. """
		if is_settled(code): return code
		t = self.temp(scope)
		block.emit('%s = %s'%(t, code))
		return t

	def operands(self, nodes, block:Block, scope:NameSpace) -> list[str]:
		"""
		Translate sibling expressions, preserving their left-to-right order of evaluation:
		if a later sibling needs statements, the value of an earlier one is saved before they run.
		"""
		parts = []
		for node in nodes:
			sub = Block()
			parts.append((sub, self(node, sub, scope)))
		codes = []
		for i, (sub, code) in enumerate(parts):
			block.absorb(sub)
			if any(later.lines for later, _ in parts[i+1:]): code = self.spill(code, block, scope)
			codes.append(code)
		return codes

	def sequence(self, nodes, block:Block, scope:NameSpace) -> str:
		"""
		Evaluate expressions in order for the value of the last. The others' values are
		discarded; since translated expressions have no side effects of their own, dropping
		them loses nothing. An empty sequence has the empty list for its value.
		"""
		code = '[]'
		for node in nodes: code = self(node, block, scope)
		return code

	def lookup(self, name:str, scope:NameSpace):
		""" Return the Python name for a Blatte variable, and the frame it lives in (None for globals). """
		pyname, space = scope.find(name)
		if space is None: return global_name(name), None
		return pyname, space.place

	def bind(self, name:str, scope:NameSpace) -> str:
		pyname = self.fresh('_v', scope)+'_'+name
		scope[name] = pyname
		return pyname

	############################################################################
	#  The templates, one per symbol.
	############################################################################

	def Wrapped(self, node, block, scope):
		return '_rt.Ws(%r, %s)'%(node.ws, self(node.inner, block, scope))

	def Scalar(self, node, block, scope):
		return repr(node.text)

	def Variable(self, node, block, scope):
		return self.lookup(node.name, scope)[0]

	def NamedArg(self, node, block, scope):
		return self(node.value, block, scope)

	def Group(self, node, block, scope):
		if not node.items: return '[]'
		codes = self.operands(node.items, block, scope)
		head = self.spill(codes[0], block, scope)
		named = ['%r: %s'%(item.inner.name, code) for item, code in zip(node.items[1:], codes[1:]) if isinstance(item.inner, syntax.NamedArg)]
		positional = [code for item, code in zip(node.items[1:], codes[1:]) if not isinstance(item.inner, syntax.NamedArg)]
		function, result = self.temp(scope), self.temp(scope)
		block.emit('%s = _rt.unwrapws(%s)'%(function, head))
		block.emit('if _rt.is_procedure(%s):'%function)
		block.inner().emit('%s = %s(%s)'%(result, function, ', '.join(['{%s}'%', '.join(named)] + positional)))
		block.emit('else:')
		if named:
			block.inner().emit('raise _rt.CallError("Named arguments given to something that is not a function: %%r" %% (%s,))'%function)
		else:
			block.inner().emit('%s = [%s]'%(result, ', '.join([head] + positional)))
		return result

	def store(self, name:str, value:str, block:Block, scope:NameSpace) -> str:
		""" Assign to whichever variable `name` means here: the innermost lexical binding, else the global. """
		pyname, home = self.lookup(name, scope)
		frame = scope.place
		if home is None: frame.global_names.add(pyname)
		elif home is not frame: frame.nonlocal_names.add(pyname)
		block.emit('%s = %s'%(pyname, value))
		return pyname

	def Define(self, node, block, scope):
		self.store(node.name, self(node.value, block, scope), block, scope)
		return '[]'

	def Assign(self, node, block, scope):
		return self.store(node.name, self(node.value, block, scope), block, scope)

	def If(self, node, block, scope):
		test = self(node.test, block, scope)
		result = self.temp(scope)
		block.emit('if _rt.true(%s):'%test)
		then = block.inner()
		then.emit('%s = %s'%(result, self(node.then, then, scope)))
		block.emit('else:')
		otherwise = block.inner()
		otherwise.emit('%s = %s'%(result, self.sequence(node.otherwise, otherwise, scope)))
		return result

	def And(self, node, block, scope):
		return self.short_circuit(node.operands, block, scope, '')

	def Or(self, node, block, scope):
		return self.short_circuit(node.operands, block, scope, 'not ')

	def short_circuit(self, operands, block, scope, polarity):
		result = self.temp(scope)
		for i, operand in enumerate(operands):
			if i:
				block.emit('if %s_rt.true(%s):'%(polarity, result))
				block = block.inner()
			block.emit('%s = %s'%(result, self(operand, block, scope)))
		return result

	def Cond(self, node, block, scope):
		result = self.temp(scope)
		chained = False
		for clause in node.clauses:
			sub = Block()
			test = self(clause.test, sub, scope)
			if chained and sub.lines:
				block.emit('else:')
				block = block.inner()
				chained = False
			block.absorb(sub)
			block.emit('%s _rt.true(%s):'%('elif' if chained else 'if', test))
			body = block.inner()
			value = self.sequence(clause.body, body, scope) if clause.body else test
			body.emit('%s = %s'%(result, value))
			chained = True
		if chained:
			block.emit('else:')
			block = block.inner()
		block.emit('%s = []'%result)
		return result

	def While(self, node, block, scope):
		sub = Block()
		test = self(node.test, sub, scope)
		if sub.lines:
			block.emit('while True:')
			body = block.inner()
			body.absorb(sub)
			body.emit('if not _rt.true(%s):'%test)
			body.inner().emit('break')
		else:
			block.emit('while _rt.true(%s):'%test)
			body = block.inner()
		mark = body.mark()
		self.sequence(node.body, body, scope)
		if body.mark() == mark: body.emit('pass')
		return '[]'

	def Lambda(self, node, block, scope):
		fname = self.fresh('_f', scope)
		frame = Frame(scope.place)
		inner = scope.new_child(frame)
		body = Block()
		positional, rest = [], None
		for param in node.params:
			pyname = self.bind(param.name, inner)
			if param.kind == syntax.NAMED: body.emit('%s = _named.get(%r)'%(pyname, param.name))
			elif param.kind == syntax.REST: rest = pyname
			else: positional.append(pyname)
		targets = positional + ([rest] if rest else [])
		unpack = '_rt.unpack(_args, %d, %s, %r)'%(len(positional), rest is not None, node.name)
		if len(targets) == 1: body.emit('%s, = %s'%(targets[0], unpack))
		elif targets: body.emit('%s = %s'%(', '.join(targets), unpack))
		else: body.emit(unpack)
		body.emit('return %s'%self.sequence(node.body, body, inner))
		block.emit('def %s(_named, *_args):'%fname)
		frame.declarations(block.inner())
		block.inner().absorb(body)
		return '_rt.Procedure(%s, %r)'%(fname, node.name)

	def Let(self, node, block, scope):
		inner = scope.new_child()
		if node.kind == 'let':
			values = self.operands([b.value for b in node.bindings], block, scope)
			for binding, value in zip(node.bindings, values):
				block.emit('%s = %s'%(self.bind(binding.name, inner), value))
		elif node.kind == 'let*':
			for binding in node.bindings:
				value = self(binding.value, block, inner)
				inner = inner.new_child()
				block.emit('%s = %s'%(self.bind(binding.name, inner), value))
		elif node.kind == 'letrec':
			names = [self.bind(binding.name, inner) for binding in node.bindings]
			if names: block.emit('%s = None'%' = '.join(names))
			values = self.operands([b.value for b in node.bindings], block, inner)
			for pyname, value in zip(names, values):
				block.emit('%s = %s'%(pyname, value))
		else:
			raise CodeGenError("Unknown binding form %r"%node.kind)
		return self.sequence(node.body, block, inner)
