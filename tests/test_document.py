import unittest
from blatte.document import translate, render
from blatte.parser import Parser
from blatte.runtime import procedure, unwrapws
from blatte.support.interfaces import ParseError

class TestRender(unittest.TestCase):
	def test_01_plain_text_round_trips(self):
		for text in [
			'',
			'Hello, world.',
			'Hello, world.\n',
			'\n\n  Indented paragraph\twith a tab.\r\n\nAnd trailing space.   ',
			'Punctuation: (parens), "quotes", and semi;colons!',
		]:
			with self.subTest(text=text):
				self.assertEqual(text, render(text))
	
	def test_02_forget_whitespace(self):
		self.assertEqual('AB', render('A \\/B'))
		self.assertEqual('A\n', render('A \\/\n'))
	
	def test_03_comments(self):
		self.assertEqual('a \nb', render('a \\; a remark\nb'))
	
	def test_04_escapes(self):
		self.assertEqual('{braces} and \\', render('\\{braces\\} and \\\\'))
		self.assertEqual('a string', render('\\"a string\\"'))
	
	def test_05_definitions_carry_forward(self):
		text = '{\\define \\x there}Hi \\x!{\\define {\\twice \\w} {\\w \\/\\w}} {\\twice na}'
		self.assertEqual('Hi there! nana', render(text))
		# A definition's value is empty, so the whitespace in front of it goes with it.
		self.assertEqual('a\nb', render('a\n{\\define \\y 1}\nb'))
	
	def test_06_namespace(self):
		namespace = {'shout': procedure(lambda x: unwrapws(x).upper())}
		self.assertEqual('Hey YOU', render('Hey {\\shout you}', namespace))
		self.assertIn('shout', namespace)
	
	def test_07_errors(self):
		with self.assertRaises(ParseError):
			render('fine {but not this')

class TestTranslate(unittest.TestCase):
	def test_pieces(self):
		pieces = list(translate('a {b}  c\n'))
		self.assertEqual(['a', ' {b}', '  c'], [text for text, program in pieces])
		for text, program in pieces:
			compile(program, '<test>', 'exec')
	
	def test_parser_choice(self):
		parser = Parser()
		self.assertEqual([], list(translate('  ', parser)))

if __name__ == '__main__':
	unittest.main()
