"""
Naming utilities for safe code generation.

Handles case conversion, collisions between generated locals and
declared parameter names, and derivation of generated class names and
output identities.
"""

import re
from typing import Iterable, Set, Dict
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # queue_not_found
    CAMEL_CASE = "camel"      # queueNotFound
    PASCAL_CASE = "pascal"    # QueueNotFound


class NameSanitizer:
    """Handles name sanitization and collision avoidance within one scope."""

    def __init__(self, reserved_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of target language reserved words
        """
        self.reserved_words = reserved_words or set()
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in the current scope.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name, unique among the names used so far
        """
        cleaned = self._clean_basic(name)
        converted = convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name).strip('_')

        # Ensure doesn't start with number
        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        return cleaned or "value"

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and names in scope."""
        if name in self.reserved_words:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()

    def add_used_names(self, names: Iterable[str]):
        """Reserve names already taken in the scope (e.g. parameters)."""
        self._used_names.update(names)


def _to_snake_case(name: str) -> str:
    name = name.replace('-', '_')
    # Split acronym runs from the following word: HTTPServer -> HTTP_Server
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    name = re.sub(r'_+', '_', name.lower())
    return name.strip('_')


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return _to_snake_case(name)

    parts = [p for p in _to_snake_case(name).split('_') if p]
    if not parts:
        return name
    if target_case == NamingCase.CAMEL_CASE:
        return parts[0] + ''.join(p.capitalize() for p in parts[1:])
    return ''.join(p.capitalize() for p in parts)


def impl_class_name(simple_name: str, suffix: str = "_impl") -> str:
    """Name of the generated class implementing an interface."""
    return f"{simple_name}{suffix}"


def output_identity(namespace: str, class_name: str) -> str:
    """Fully qualified name of a generated unit; unique per interface."""
    return f"{namespace}.{class_name}" if namespace else class_name


def is_qualified_name(name: str) -> bool:
    """True for dotted names such as ``pkg.errors.QueueError``."""
    parts = name.split(".")
    return len(parts) > 1 and all(part.isidentifier() for part in parts)


def namespace_path(namespace: str) -> str:
    """Directory path for a dotted namespace ('' for the root)."""
    return "/".join(namespace.split(".")) if namespace else ""
