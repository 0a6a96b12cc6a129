import setuptools

setuptools.setup(
	name='blatte',
	version='0.1.0',
	packages=[
		'blatte',
		'blatte.scanning',
		'blatte.support',
	],
	description='Blatte: a text markup language with three metacharacters, translated to Python',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Topic :: Text Processing :: Markup",
		"Development Status :: 3 - Alpha",
    ],
)
