import re

from setuptools import setup, find_packages
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

version_file_contents = open(path.join(here, 'typedcas/_version.py'), encoding='utf-8').read()
VERSION = re.compile('__version__ = \"(.*)\"').search(version_file_contents).group(1)

setup(
    name='typedcas',

    version=VERSION,

    description='Typed, indexed annotation stores for UIMA/DKPro style NLP annotation types',
    long_description=open(path.join(here, 'README.md'), encoding='utf-8').read(),
    long_description_content_type="text/markdown",

    license='Apache License 2.0',

    classifiers=[
        'Development Status :: 4 - Beta',

        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Text Processing',
        'Topic :: Text Processing :: Linguistic',
        'Topic :: Software Development :: Libraries',

        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='natural-language-processing nlp uima dkpro annotation cas type-system',

    packages=find_packages(exclude=['docs']),

    install_requires=['networkx', 'numpy'],

    python_requires='>=3.8',

    extras_require={
        'dev': ['check-manifest'],
        'test': ['coverage', 'pytest'],
    },

    include_package_data=True,

    entry_points={
        'console_scripts': [
            'typedcas=typedcas.pipeline.core:main',
        ],
    },
)
