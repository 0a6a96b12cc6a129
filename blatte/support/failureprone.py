"""
Polite error displays.

Blatte documents are mostly prose with a little code sprinkled in, so when a
brace is left dangling somewhere on page three, the author deserves to see the
offending line with the trouble spot underlined, not just a character offset.

Scanning and parsing only ever deal in integer positions. A SourceText turns
those into line and column numbers and finds the text of the line in question;
`illustration` draws the picture.

What counts as a line break is up to the LINEBREAK_MODE in use. The default
accepts the Unix, old Apple, and DOS conventions alike.
"""

import bisect, re

LINEBREAK_MODE = {
	'normal': re.compile(r'\r\n?|\n'),
	'unix': re.compile(r'\n'),
	'dos': re.compile(r'\r\n'),
}

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	"""
	The line, and under it a row of carets beneath the `width` characters at `start`.
	Tabs in the line are kept in the margin, so the carets stay lined up.
	"""
	text = single_line.rstrip('\r\n')
	margin = re.sub(r'[^\t]', ' ', prefix + text[:start])
	carets = '^' * max(1, min(width, len(text) - start))
	return "%s%s\n%s%s %s"%(prefix, text.rstrip(), margin, carets, caption)

class SourceText:
	""" The text of a document, with what it takes to say where in it something went wrong. """

	def __init__(self, content:str, line_breaks='normal', filename:str=None, first_line=1):
		self.content = content
		self.filename = filename
		self.line_breaks = line_breaks
		self.first_line = first_line
		self.__starts = None

	def __line_starts(self) -> list:
		# Most documents never need this, so it waits until asked.
		if self.__starts is None:
			breaks = LINEBREAK_MODE[self.line_breaks].finditer(self.content)
			self.__starts = [0] + [m.end() for m in breaks]
		return self.__starts

	def find_row_col(self, index:int):
		""" Line number (counting from first_line) and zero-based column of an offset into the content. """
		starts = self.__line_starts()
		r = bisect.bisect_right(starts, index) - 1
		return r + self.first_line, index - starts[r]

	def line_of_text(self, row:int) -> str:
		""" The text of a line, line break included, by the same numbering as `find_row_col`. """
		starts = self.__line_starts()
		r = max(0, row - self.first_line)
		stop = starts[r+1] if r+1 < len(starts) else len(self.content)
		return self.content[starts[r]:stop]

	def where(self, row:int, col:int) -> str:
		place = "At" if self.filename is None else "%s:"%self.filename
		return "%s line %d, column %d"%(place, row, col + 1)

	def complaint(self, a_slice:slice, message:str) -> str:
		row, col = self.find_row_col(a_slice.start)
		picture = illustration(self.line_of_text(row), col, a_slice.stop - a_slice.start, prefix=' >>> ')
		return "%s: %s\n%s"%(self.where(row, col), message, picture)
