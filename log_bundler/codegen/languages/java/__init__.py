"""
Java code generator module.

Generates slf4j-backed implementations of log bundle interfaces.
"""

from .generator import JavaGenerator, create_java_generator
from .naming import JAVA_RESERVED_WORDS, create_java_sanitizer

__all__ = [
    "JavaGenerator",
    "create_java_generator",
    "JAVA_RESERVED_WORDS",
    "create_java_sanitizer",
]
