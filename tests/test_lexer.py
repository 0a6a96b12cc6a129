import unittest
from blatte.lexer import LEXEMES, unescape
from blatte.support.interfaces import LexError, ParseError

def scan(text):
	return [(token.kind, token.semantic) for token in LEXEMES.scan(text)]

class TestLexer(unittest.TestCase):
	def test_words_and_whitespace(self):
		self.assertEqual([('word', 'hello,'), ('ws', ' \n\t'), ('word', 'world')], scan('hello, \n\tworld'))
	
	def test_escaped_metacharacters_are_word_characters(self):
		self.assertEqual([('word', '{a}'), ('ws', ' '), ('word', 'b\\c')], scan(r'\{a\} b\\c'))
		self.assertEqual('a{b', unescape(r'a\{b'))
	
	def test_braces(self):
		self.assertEqual([('{', None), ('word', 'a'), ('}', None)], scan('{a}'))
	
	def test_variables(self):
		self.assertEqual([('var', 'x'), ('word', '!')], scan(r'\x!'))
		self.assertEqual([('var', 'set!')], scan(r'\set!'))
		self.assertEqual([('var', 'set')], scan(r'\set'))
		self.assertEqual([('var', 'let*')], scan(r'\let*'))
		self.assertEqual([('var', 'letrec')], scan(r'\letrec'))
		self.assertEqual([('var', 'a_1'), ('var', 'b')], scan(r'\a_1\b'))
	
	def test_parameters_and_named_arguments(self):
		self.assertEqual([('named_arg', 'size')], scan(r'\size='))
		self.assertEqual([('named_param', 'size')], scan(r'\=size'))
		self.assertEqual([('rest_param', 'more')], scan(r'\&more'))
	
	def test_strings(self):
		self.assertEqual([('string', 'a b')], scan(r'\"a b\"'))
		self.assertEqual([('string', '')], scan(r'\"\"'))
		self.assertEqual([('string', 'back\\slash {brace}')], scan(r'\"back\\slash {brace}\"'))
		self.assertEqual([('string', 'x'), ('ws', ' '), ('string', 'y')], scan(r'\"x\" \"y\"'))
	
	def test_unterminated_string(self):
		with self.assertRaises(LexError) as context:
			scan(r'a \"never ends')
		self.assertEqual(2, context.exception.position)
	
	def test_comments_vanish_but_keep_the_newline(self):
		self.assertEqual([('word', 'a'), ('ws', ' '), ('ws', '\n'), ('word', 'b')], scan('a \\; remark\nb'))
	
	def test_forget_whitespace(self):
		self.assertEqual([('word', 'A'), ('ws', ' '), ('forget', None), ('word', 'B')], scan(r'A \/B'))
	
	def test_bad_escape(self):
		self.assertEqual([('bad_escape', '1')], scan(r'\1'))
		self.assertEqual([('bad_escape', ' ')], scan('\\ '))
	
	def test_dangling_backslash(self):
		with self.assertRaises(LexError) as context:
			scan('abc\\')
		self.assertEqual(slice(3, 4), context.exception.span)
	
	def test_lex_errors_are_parse_errors(self):
		self.assertTrue(issubclass(LexError, ParseError))
	
	def test_positions(self):
		tokens = list(LEXEMES.scan(r'{\f x}'))
		self.assertEqual([(0, 1), (1, 3), (3, 4), (4, 5), (5, 6)], [(t.start, t.stop) for t in tokens])

if __name__ == '__main__':
	unittest.main()
