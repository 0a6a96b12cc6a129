"""
The abstract syntax of Blatte.

Every expression the parser recognizes arrives wrapped: `Wrapped(ws, form)`
pairs a form with the whitespace that preceded it in the source. Sub-expressions
of special forms are wrapped the same way, all the way down. The generator turns
each wrapper into a run-time `Ws` so the whitespace survives evaluation.

Categories:
	expr -- a Wrapped form; the only thing that may appear where an expression goes.
	form -- what a wrapper may contain.
	param, clause, binding -- the pieces of lambda, cond, and the let-family.
"""

from .support.trees import RankedAlphabet

BLATTE = RankedAlphabet('expr', 'form', 'param', 'clause', 'binding')

Wrapped = BLATTE.symbol('Wrapped', 'expr', ws='text', inner='form')

Scalar = BLATTE.symbol('Scalar', 'form', text='text')
Variable = BLATTE.symbol('Variable', 'form', name='text')
Group = BLATTE.symbol('Group', 'form', items='expr*')
NamedArg = BLATTE.symbol('NamedArg', 'form', name='text', value='expr')

Define = BLATTE.symbol('Define', 'form', name='text', value='expr')
Assign = BLATTE.symbol('Assign', 'form', name='text', value='expr')
If = BLATTE.symbol('If', 'form', test='expr', then='expr', otherwise='expr*')
And = BLATTE.symbol('And', 'form', operands='expr+')
Or = BLATTE.symbol('Or', 'form', operands='expr+')
Clause = BLATTE.symbol('Clause', 'clause', test='expr', body='expr*')
Cond = BLATTE.symbol('Cond', 'form', clauses='clause*')
While = BLATTE.symbol('While', 'form', test='expr', body='expr*')
Param = BLATTE.symbol('Param', 'param', kind='text', name='text')
Lambda = BLATTE.symbol('Lambda', 'form', name='text?', params='param*', body='expr*')
Binding = BLATTE.symbol('Binding', 'binding', name='text', value='expr')
Let = BLATTE.symbol('Let', 'form', kind='text', bindings='binding*', body='expr*')

POSITIONAL, NAMED, REST = 'positional', 'named', 'rest'
LET_KINDS = ('let', 'let*', 'letrec')
