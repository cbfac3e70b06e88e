"""
Python code generator module.

Generates ``logging``-backed implementations of log bundle interfaces.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PYTHON_RESERVED_WORDS, create_python_sanitizer, impl_module_name

__all__ = [
    "PythonGenerator",
    "create_python_generator",
    "PYTHON_RESERVED_WORDS",
    "create_python_sanitizer",
    "impl_module_name",
]
