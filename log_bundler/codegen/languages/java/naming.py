"""
Java-specific naming utilities.

Handles Java reserved words for locals declared in generated bodies.
"""

from ...core.naming import NameSanitizer


# Java reserved words and literals
JAVA_RESERVED_WORDS = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch",
    "char", "class", "const", "continue", "default", "do", "double",
    "else", "enum", "extends", "final", "finally", "float", "for", "goto",
    "if", "implements", "import", "instanceof", "int", "interface", "long",
    "native", "new", "package", "private", "protected", "public", "return",
    "short", "static", "strictfp", "super", "switch", "synchronized",
    "this", "throw", "throws", "transient", "try", "void", "volatile",
    "while", "true", "false", "null",
}


def create_java_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Java."""
    return NameSanitizer(JAVA_RESERVED_WORDS)


def simple_type_name(qualified: str) -> str:
    """``org.slf4j.Logger`` -> ``Logger``."""
    return qualified.rsplit(".", 1)[-1]
