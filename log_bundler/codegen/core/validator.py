"""
Semantic validation of bundle methods.

Enforces one annotation kind per method, global message-id uniqueness
across every bundle of a run, and known log levels.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import (
    ConflictingAnnotationError,
    DuplicateMessageIdError,
    UnknownLevelError,
    ValidationError,
)
from .schema import AnnotationKind, BundleDeclaration, LogLevel, MethodDeclaration

logger = get_logger(__name__)


class MessageIdRegistry:
    """Message id -> template for everything registered during one run."""

    def __init__(self):
        self._templates: Dict[int, str] = {}

    def register(self, message_id: int, template: str) -> None:
        """
        Register a message id.

        Raises:
            DuplicateMessageIdError: If the id is already registered, even
                with identical template text
        """
        if message_id in self._templates:
            raise DuplicateMessageIdError(
                message_id, template, self._templates[message_id]
            )
        self._templates[message_id] = template

    def get(self, message_id: int) -> Optional[str]:
        return self._templates.get(message_id)

    def __contains__(self, message_id: int) -> bool:
        return message_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def ids(self) -> List[int]:
        return sorted(self._templates)


@dataclass
class GenerationContext:
    """State owned by a single generation round."""

    config: GeneratorConfig = field(default_factory=GeneratorConfig)
    registry: MessageIdRegistry = field(default_factory=MessageIdRegistry)
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


@dataclass(frozen=True)
class ValidatedMethod:
    """A method whose kind and level have been resolved."""

    method: MethodDeclaration
    kind: AnnotationKind
    level: Optional[LogLevel] = None

    @property
    def annotation(self):
        return self.method.annotation_for(self.kind)


def check_annotations(
    method: MethodDeclaration, context: GenerationContext, owner: str = ""
) -> AnnotationKind:
    """Resolve the annotation kind of a method, rejecting invalid combinations."""
    kinds = method.kinds
    where = f"{owner}.{method.name}" if owner else method.name
    names = [k.annotation_name for k in kinds]

    if not kinds:
        raise ValidationError(f"{where} carries no recognised annotation")

    if len(kinds) == len(AnnotationKind):
        raise ConflictingAnnotationError(where, names)

    if len(kinds) > 1:
        if context.config.strict_annotations:
            raise ConflictingAnnotationError(where, names)
        context.warn(
            f"{where} combines {' and '.join(names)}; generating it as {names[0]}"
        )

    return kinds[0]


def validate_method(
    method: MethodDeclaration, context: GenerationContext, owner: str = ""
) -> ValidatedMethod:
    """
    Validate one method before it is emitted.

    Registers Message and LogMessage ids in the run's registry as a side
    effect, so a method must be validated exactly once per run.

    Args:
        method: Method to validate
        context: Current round state
        owner: Qualified bundle name, used in diagnostics

    Returns:
        ValidatedMethod with the resolved kind and level
    """
    kind = check_annotations(method, context, owner)

    if kind == AnnotationKind.GET_LOGGER:
        return ValidatedMethod(method, kind)

    annotation = method.annotation_for(kind)

    level = None
    if kind == AnnotationKind.LOG_MESSAGE:
        level = LogLevel.parse(annotation.level)
        if level is None:
            raise UnknownLevelError(
                annotation.level, f"{owner}.{method.name}" if owner else method.name
            )

    context.registry.register(annotation.id, annotation.value)
    logger.debug("Registered message %s for %s.%s", annotation.id, owner, method.name)

    return ValidatedMethod(method, kind, level)


def validate_bundle(
    bundle: BundleDeclaration, context: GenerationContext
) -> List[ValidatedMethod]:
    """Validate every method of a bundle in declaration order."""
    return [
        validate_method(method, context, bundle.qualified_name)
        for method in bundle.methods
        if method.is_annotated
    ]
