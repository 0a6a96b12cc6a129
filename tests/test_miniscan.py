import unittest
from blatte.scanning import miniscan
from blatte.support.interfaces import LexError

def pairs(scanner):
	return [(token.kind, token.semantic) for token in scanner]

class TestMiniScan(unittest.TestCase):
	def test_01_simple_tokens_with_rank_feature(self):
		s = miniscan.Definition()
		s.ignore(r'\s+') # Ignore spaces except inasmuch as they separate tokens.
		s.token('word', r'\w+') # The digits are included in the \w shorthand,
		s.token_map('number', r'\d+', int, rank=1) # but the higher rank (than default zero) makes numbers stand out.
		self.assertEqual(
			[
				('word', 'abc'),
				('number', 123),
				('word', 'def456'),
				('number', 789),
				('word', 'XYZ'),
			],
			pairs(s.scan(' abc   123  def456  789XYZ ')),
		)
	
	def test_02_longest_match_then_first_defined(self):
		s = miniscan.Definition()
		s.token('short', r'ab')
		s.token('long', r'abc')
		s.token('also_long', r'abc')
		s.token('other', r'[a-z]')
		self.assertEqual([('long', 'abc'), ('short', 'ab')], pairs(s.scan('abcab')))
	
	def test_03_let_expansion(self):
		s = miniscan.Definition()
		s.let('digit', r'[0-9]')
		s.let('number', r'{digit}+')
		s.token('pair', r'{number},{number}')
		s.token('brace', r'[{}]')
		self.assertEqual([('pair', '12,345'), ('brace', '{'), ('brace', '}')], pairs(s.scan('12,345{}')))
	
	def test_04_zero_width_never_wins(self):
		s = miniscan.Definition()
		s.token('maybe', r'x*')
		s.token('y', r'y')
		self.assertEqual([('y', 'y'), ('maybe', 'xx')], pairs(s.scan('yxx')))
	
	def test_05_stuck(self):
		s = miniscan.Definition()
		s.token('x', r'x')
		with self.assertRaises(LexError) as context:
			list(s.scan('xx?'))
		self.assertEqual(slice(2, 3), context.exception.span)
	
	def test_06_lazy(self):
		s = miniscan.Definition()
		s.token('x', r'x')
		tokens = iter(s.scan('xx?'))
		self.assertEqual('x', next(tokens).kind)
		self.assertEqual('x', next(tokens).kind)
		with self.assertRaises(LexError):
			next(tokens)
	
	def test_07_positions_and_starting_offset(self):
		s = miniscan.Definition()
		s.token('word', r'\w+')
		s.ignore(r'\s+')
		tokens = list(s.scan('ab cd  ef', at=3))
		self.assertEqual([(3, 5), (7, 9)], [(t.start, t.stop) for t in tokens])
		self.assertEqual(slice(7, 9), tokens[1].span())
	
	def test_08_forgotten_action(self):
		s = miniscan.Definition()
		s.on(r'x')
		with self.assertRaises(AssertionError):
			s.on(r'y')
		t = miniscan.Definition()
		t.on(r'x')
		with self.assertRaises(AssertionError):
			t.scan('x')
	
	def test_09_custom_action(self):
		s = miniscan.Definition()
		@s.on(r'[a-z]+')
		def word(yy):
			yy.token('word', yy.match().upper())
			yy.token('length', yy.right - yy.left)
		s.ignore(r'\s+')
		self.assertEqual([('word', 'AB'), ('length', 2), ('word', 'C'), ('length', 1)], pairs(s.scan('ab c')))

if __name__ == '__main__':
	unittest.main()
