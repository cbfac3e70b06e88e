"""
Runtime support imported by generated Python bundles.

Provides the logger factory, slf4j-style message formatting and a
locator returning the ready-made instance of a generated bundle.
"""

import importlib
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

# \{} is a literal pair of braces, {} takes the next argument, {N} argument N
_ANCHOR = re.compile(r"\\\{\}|\{\}|\{(\d+)\}")


@dataclass(frozen=True)
class FormattedMessage:
    """Result of format_message."""

    message: str
    args: Tuple[Any, ...] = ()
    throwable: Optional[BaseException] = None


def get_logger(name: str) -> logging.Logger:
    """Logger handle used by generated classes."""
    return logging.getLogger(name)


def format_message(template: str, *args: Any) -> FormattedMessage:
    """
    Substitute arguments into a message template.

    ``{}`` anchors consume arguments in order, ``{N}`` refers to argument N
    and ``\\{}`` renders a literal ``{}``. Anchors without a matching
    argument are left untouched. A trailing exception no anchor used is
    returned as ``throwable`` instead of being rendered.
    """
    used = set()
    position = 0

    def substitute(match: "re.Match") -> str:
        nonlocal position
        token = match.group(0)
        if token == "\\{}":
            return "{}"

        if match.group(1) is not None:
            index = int(match.group(1))
        else:
            index = position
            position += 1

        if index >= len(args):
            return token
        used.add(index)
        return str(args[index])

    message = _ANCHOR.sub(substitute, template)

    throwable = None
    last = len(args) - 1
    if args and isinstance(args[last], BaseException) and last not in used:
        throwable = args[last]

    return FormattedMessage(message=message, args=tuple(args), throwable=throwable)


def get_bundle(interface: type, impl_suffix: str = "_impl") -> Any:
    """
    Return the shared instance of the class generated for a bundle interface.

    Raises:
        LookupError: If the generated module or class cannot be found
    """
    from .codegen.languages.python.naming import impl_module_name

    class_name = f"{interface.__name__}{impl_suffix}"
    module_name = impl_module_name(interface.__module__, class_name)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LookupError(
            f"No generated implementation of {interface.__qualname__} ({module_name})"
        ) from e

    impl = getattr(module, class_name, None)
    if impl is None:
        raise LookupError(f"{module_name} does not define {class_name}")
    return impl.INSTANCE
