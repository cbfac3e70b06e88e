"""
Language-specific code generators.

This module contains the generators for each supported target language.
"""

from .java import JavaGenerator, create_java_generator
from .python import PythonGenerator, create_python_generator

__all__ = [
    "JavaGenerator",
    "create_java_generator",
    "PythonGenerator",
    "create_python_generator",
]
