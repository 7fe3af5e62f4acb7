#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()

requirements = ['pysam>=0.15', 'pandas>=0.18', 'toolz>=0.8',
                'frozendict>=1.2']

test_requirements = ['pytest', 'pytest-cov', 'pytest-mock',
                     'pytest-helpers-namespace']

setup(
    name='pytnseq',
    version='0.1.0',
    description=('Tool for identifying transposon insertion sites '
                 'from fragmented TnSeq read alignments.'),
    long_description=readme + '\n\n' + history,
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    install_requires=requirements,
    license='MIT license',
    zip_safe=False,
    keywords='pytnseq',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
    extras_require={
        'test': test_requirements
    },
    entry_points={'console_scripts': [
        'pytnseq = pytnseq.main.pytnseq:main'
    ]})
