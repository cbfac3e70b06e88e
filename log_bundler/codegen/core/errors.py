"""
Error kinds raised while compiling log bundles.

Every error aborts the current generation round; none of them is
downgraded to a warning.
"""

from typing import Optional, Sequence


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class DeclarationError(GeneratorError):
    """Raised when declaration input cannot be turned into the metadata model."""

    pass


class ValidationError(GeneratorError):
    """Base class for semantic validation failures."""

    pass


class ConflictingAnnotationError(ValidationError):
    """A method carries more than one mutually exclusive annotation."""

    def __init__(self, method: str, kinds: Sequence[str]):
        self.method = method
        self.kinds = tuple(kinds)
        super().__init__(
            f"Cannot use combined annotations {', '.join(self.kinds)} on {method}"
        )


class DuplicateMessageIdError(ValidationError):
    """A message id was registered twice in the same run."""

    def __init__(self, message_id: int, template: str, previous: str):
        self.message_id = message_id
        self.template = template
        self.previous = previous
        super().__init__(
            f"message {message_id} with definition = {template} "
            f"was previously defined as {previous}"
        )


class UnknownLevelError(ValidationError):
    """A LogMessage level is outside WARN/INFO/ERROR."""

    def __init__(self, level: object, method: Optional[str] = None):
        self.level = level
        self.method = method
        where = f" on {method}" if method else ""
        super().__init__(f"illegal method level {level!r}{where}")


class DuplicateOutputError(GeneratorError):
    """Two bundles resolve to the same output identity."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"More than one bundle generates {identity}")


class OutputWriteError(GeneratorError):
    """A generated unit could not be written."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")
