#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for RV32 Instruction Builder Python package
"""

from setuptools import setup, find_packages
import os


def read_file(filename):
    """Read a file's content"""
    with open(os.path.join(os.path.dirname(__file__), filename), 'r', encoding='utf-8') as f:
        return f.read()


setup(
    name='rv-builder',
    version='1.0.0',
    description='RV32 Instruction Builder - Assemble RISC-V instruction words from their fields',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    author='',
    author_email='',
    packages=find_packages(exclude=['test', 'test.*']),
    install_requires=[],
    entry_points={
        'console_scripts': [
            'rv-builder=py_rv_builder.cli:main',
        ],
    },
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Topic :: Software Development :: Assemblers',
        'Topic :: Education',
    ],
    keywords='risc-v, rv32i, instruction encoding, education',
    license='MIT',
)
