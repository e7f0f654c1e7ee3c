#!/usr/bin/env python
from setuptools import setup

requires = ['func_prototypes', 'docopt', 'delnone', 'tqdm']
test_requires = ['tox', 'pytest', 'tabulate']

setup(
    name='transducible',
    version='0.1.0',
    author='The transducible authors',
    packages=['transducible'],
    install_requires = requires,
    extras_require = {'test': test_requires},
    entry_points = {
      'console_scripts': [
        'transducible = transducible.ui:main',
        ],
    },
    license='MIT',
    description='transducers which run the same step logic eagerly, lazily, as a fold, or over a channel.',
    long_description_content_type='text/markdown',
    long_description=open('README.md').read(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3',
    ],
)
