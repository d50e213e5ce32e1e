"""
Setup script for shadowcore.

Usage:
    pip install -e .           # Editable install
    pip install -e ".[dev]"    # With test dependencies

Pure Python package; float32 arithmetic relies on numpy >= 2 scalar
promotion rules (NEP 50).
"""

from setuptools import setup, find_packages


setup(
    name='shadowcore',
    version='0.1.0',
    description='Triangle intersection and mesh edge adjacency for shadow rendering',
    python_requires='>=3.9',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=[
        'numpy>=2.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
        ],
    },
)
