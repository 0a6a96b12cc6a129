"""
Render a Blatte document: run each expression in it and write out the resulting text.
With --python, write out the translated programs instead.
"""

import sys, os, argparse

from .document import translate, render
from .support.failureprone import SourceText
from .support.interfaces import LanguageError

def parse_arguments():
	parser = argparse.ArgumentParser(prog='py -m blatte', description=__doc__,)
	parser.add_argument('source_path', help='path to input file')
	parser.add_argument('-f', '--force', action='store_true', dest='force', help='allow to write over existing file')
	parser.add_argument('-o', '--output', help='path to output file; standard output if not given')
	parser.add_argument('--python', action='store_true', help='Write the generated Python programs rather than running them.')
	return parser.parse_args()

def python_listing(document:str) -> str:
	chunks = []
	for text, program in translate(document):
		chunks.append(''.join('# '+line+'\n' for line in text.strip().splitlines()))
		chunks.append(program)
	return '\n'.join(chunks)

def main(args):
	if args.output and os.path.exists(args.output) and not args.force:
		print('Target file already exists and --force command-line argument was not given.', file=sys.stderr)
		exit(1)
	with open(args.source_path) as fh: document = fh.read()
	try:
		result = python_listing(document) if args.python else render(document)
	except LanguageError as e:
		print(e.complaint(SourceText(document, filename=args.source_path)), file=sys.stderr)
		exit(1)
	if args.output:
		with open(args.output, 'w') as fh: fh.write(result)
	else:
		sys.stdout.write(result)

if __name__ == '__main__': main(parse_arguments())
