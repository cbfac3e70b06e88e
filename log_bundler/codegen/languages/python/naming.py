"""
Python-specific naming utilities and sanitization.

Handles Python keywords and builtins, and where generated
implementation modules live relative to their interfaces.
"""

import keyword

from ...core.naming import NameSanitizer, NamingCase, convert_case


PYTHON_RESERVED_WORDS = set(keyword.kwlist) | {
    "self", "logger", "_format_message", "_get_logger", "logging",
    "str", "int", "float", "bool", "list", "dict", "tuple", "object",
}


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)


def impl_module_name(namespace: str, class_name: str) -> str:
    """
    Dotted name of the module generated for an interface.

    The module sits next to the interface's module, named after both so
    two bundles of one module never share a file:
    ``pkg.messages`` + ``ServerBundle_impl`` -> ``pkg.messages_server_bundle_impl``.
    """
    leaf = convert_case(class_name, NamingCase.SNAKE_CASE)
    return f"{namespace}_{leaf}" if namespace else leaf
