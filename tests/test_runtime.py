import unittest
from blatte.runtime import (
	Ws, wrapws, unwrapws, wsof, traverse, flatten, true, quote,
	Procedure, procedure, is_procedure, unpack, CallError, evaluate, RESULT_NAME,
)

class TestWrappers(unittest.TestCase):
	def test_wsof(self):
		for w in ['', ' ', '\n\t  ']:
			for x in ['a', ['a'], wrapws('  ', 'b'), None]:
				self.assertEqual(w, wsof(wrapws(w, x)))
		self.assertEqual('', wsof('a'))
	
	def test_unwrapws(self):
		self.assertEqual('x', unwrapws(wrapws(' ', 'x')))
		self.assertEqual('x', unwrapws(wrapws(' ', wrapws('\n', 'x'))))
		self.assertEqual('x', unwrapws('x'))
		inner = [wrapws(' ', 'x')]
		self.assertIs(inner, unwrapws(unwrapws(wrapws(' ', inner))))
	
	def test_ws_is_a_value(self):
		self.assertEqual(Ws(' ', 'a'), Ws(' ', 'a'))
		self.assertNotEqual(Ws(' ', 'a'), Ws('', 'a'))
		self.assertNotEqual(Ws(' ', 'a'), 'a')
		self.assertEqual(hash(Ws(' ', ['a'])), hash(Ws(' ', ['a'])))
		self.assertEqual("Ws(' ', 'a')", repr(Ws(' ', 'a')))
		with self.assertRaises(AttributeError):
			Ws(' ', 'a').ws = ''

class TestTraverse(unittest.TestCase):
	def test_flatten_override_applies_once(self):
		value = [Ws('1', 'a'), Ws('2', 'b'), Ws('3', 'c')]
		self.assertEqual('1a2b3c', flatten(value))
		self.assertEqual('>a2b3c', flatten(value, '>'))
		self.assertEqual('>a2b3c', flatten(Ws('0', value), '>'))
		self.assertEqual('0a2b3c', flatten(Ws('0', value)))
	
	def test_nested_lists_stay_nested(self):
		value = [Ws(' ', [Ws('', 'a'), Ws(' ', 'b')]), Ws(' ', 'c')]
		self.assertEqual(' a b c', flatten(value))
		self.assertEqual(2, len(value))
	
	def test_flatten_odd_scalars(self):
		self.assertEqual('', flatten([]))
		self.assertEqual('', flatten(None))
		self.assertEqual(' 5', flatten(Ws(' ', 5)))
		self.assertEqual('<Procedure p>', flatten([Procedure(print, 'p')]))
		self.assertEqual('ab', flatten(('a', 'b')))
	
	def test_unconsumed_whitespace_moves_along(self):
		seen = []
		def callback(ws, scalar):
			seen.append((ws, scalar))
			return None if scalar == 'skip' else scalar.upper()
		value = [Ws(' ', 'skip'), Ws('\t', 'x'), Ws('\n', 'y')]
		self.assertEqual('X', traverse(value, callback, '>'))
		self.assertEqual([('>', 'skip'), ('>', 'x'), ('\n', 'y')], seen)
	
	def test_falsy_payload_still_counts(self):
		seen = []
		def callback(ws, scalar):
			seen.append((ws, scalar))
			return ''
		self.assertEqual('', traverse([Ws('1', 'a'), Ws('2', 'b')], callback, '>'))
		self.assertEqual([('>', 'a'), ('2', 'b')], seen)
	
	def test_nothing_consumed(self):
		self.assertIsNone(traverse([], lambda ws, x: x))
		self.assertIsNone(traverse(['a', 'b'], lambda ws, x: False))
	
	def test_procedures_are_not_entered(self):
		p = Procedure(lambda named: ['inside'])
		self.assertEqual([p], collect(p))

def collect(value):
	found = []
	traverse(value, lambda ws, x: found.append(x))
	return found

class TestTruth(unittest.TestCase):
	def test_false(self):
		for value in [0, 0.0, '', '0', [], (), None, False, Ws(' ', ''), Ws(' ', Ws('', []))]:
			self.assertFalse(true(value), repr(value))
	
	def test_true(self):
		for value in [1, -1, 'a', '0.0', '00', ' ', [0], [''], [[]], True, Ws(' ', 'x'), Procedure(print)]:
			self.assertTrue(true(value), repr(value))

class TestQuote(unittest.TestCase):
	def test_quote(self):
		self.assertEqual('\\"\\"', quote(''))
		self.assertEqual('\\"a b\\"', quote('a b'))
		self.assertEqual('\\"a\\\\ b\\"', quote('a\\ b'))
		self.assertEqual('a\\{b\\}', quote('a{b}'))
		self.assertEqual('back\\\\slash', quote('back\\slash'))
		self.assertEqual('plain', quote('plain'))

class TestCalling(unittest.TestCase):
	def test_procedure(self):
		p = Procedure(lambda named, *args: (named, args), 'p')
		self.assertEqual(({'a': 1}, (2, 3)), p({'a': 1}, 2, 3))
		self.assertEqual('<Procedure p>', repr(p))
		self.assertEqual('<Procedure anonymous>', str(Procedure(print)))
	
	def test_is_procedure(self):
		self.assertTrue(is_procedure(Procedure(print)))
		self.assertFalse(is_procedure(print))
		self.assertFalse(is_procedure(Ws('', Procedure(print))))
	
	def test_procedure_decorator(self):
		@procedure
		def greet(who, greeting='Hello'):
			return greeting+', '+who
		self.assertIsInstance(greet, Procedure)
		self.assertEqual('greet', greet.name)
		self.assertEqual('Hello, you', greet({}, 'you'))
		self.assertEqual('Hi, you', greet({'greeting': 'Hi'}, 'you'))
	
	def test_unpack(self):
		self.assertEqual(('a', 'b'), unpack(('a', 'b'), 2, False))
		self.assertEqual(('a', ['b', 'c']), unpack(('a', 'b', 'c'), 1, True))
		self.assertEqual(([],), unpack((), 0, True))
		self.assertEqual((), unpack((), 0, False))
		with self.assertRaises(CallError): unpack(('a',), 2, False, 'f')
		with self.assertRaises(CallError): unpack(('a', 'b'), 1, False)
		with self.assertRaises(CallError): unpack((), 1, True)
		self.assertTrue(issubclass(CallError, TypeError))
	
	def test_evaluate(self):
		namespace = {}
		self.assertEqual(3, evaluate('%s = 1 + 2\n'%RESULT_NAME, namespace))
		self.assertEqual(3, namespace[RESULT_NAME])
		self.assertEqual('x', evaluate('%s = "x"\n'%RESULT_NAME))

if __name__ == '__main__':
	unittest.main()
