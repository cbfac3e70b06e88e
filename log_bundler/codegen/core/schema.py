"""
Metadata model for log bundle declarations.

Converts declaration documents into a normalized internal format
that the validator and generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from enum import Enum

from .errors import DeclarationError


class AnnotationKind(Enum):
    """Per-method annotation kinds, in resolution order."""

    MESSAGE = "message"
    LOG_MESSAGE = "log_message"
    GET_LOGGER = "get_logger"

    @property
    def annotation_name(self) -> str:
        return {
            AnnotationKind.MESSAGE: "Message",
            AnnotationKind.LOG_MESSAGE: "LogMessage",
            AnnotationKind.GET_LOGGER: "GetLogger",
        }[self]


class LogLevel(Enum):
    """Levels a LogMessage method may log at."""

    WARN = "WARN"
    INFO = "INFO"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value: Any) -> Optional["LogLevel"]:
        """Resolve a level name case-insensitively, None if unrecognised."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return None
        return None


def _quote(text: str) -> str:
    return '"' + text + '"'


@dataclass(frozen=True)
class MessageAnnotation:
    """@Message(id, value): the method returns the formatted message."""

    id: int
    value: str

    def render(self) -> str:
        return f"@Message(id={self.id}, value={_quote(self.value)})"


@dataclass(frozen=True)
class LogMessageAnnotation:
    """@LogMessage(id, value, level): the method logs the formatted message."""

    id: int
    value: str
    # Kept raw when unrecognised so the validator can report it
    level: Union[LogLevel, str] = LogLevel.INFO

    def render(self) -> str:
        level = self.level.value if isinstance(self.level, LogLevel) else self.level
        return (
            f"@LogMessage(id={self.id}, value={_quote(self.value)}, level={level})"
        )


@dataclass(frozen=True)
class GetLoggerAnnotation:
    """@GetLogger: the method returns the bundle's logger."""

    def render(self) -> str:
        return "@GetLogger()"


@dataclass(frozen=True)
class ParameterDeclaration:
    """A single method parameter. Order within a method is significant."""

    type: str
    name: str


@dataclass(frozen=True)
class MethodDeclaration:
    """A bundle method together with every annotation discovered on it."""

    name: str
    return_type: Optional[str] = None
    parameters: Tuple[ParameterDeclaration, ...] = ()
    message: Optional[MessageAnnotation] = None
    log_message: Optional[LogMessageAnnotation] = None
    get_logger: Optional[GetLoggerAnnotation] = None

    @property
    def kinds(self) -> List[AnnotationKind]:
        """Annotation kinds present on this method, in resolution order."""
        present = []
        if self.message is not None:
            present.append(AnnotationKind.MESSAGE)
        if self.log_message is not None:
            present.append(AnnotationKind.LOG_MESSAGE)
        if self.get_logger is not None:
            present.append(AnnotationKind.GET_LOGGER)
        return present

    @property
    def kind(self) -> Optional[AnnotationKind]:
        kinds = self.kinds
        return kinds[0] if kinds else None

    @property
    def is_annotated(self) -> bool:
        return bool(self.kinds)

    def annotation_for(self, kind: AnnotationKind):
        return getattr(self, kind.value)


@dataclass(frozen=True)
class BundleDeclaration:
    """One annotated interface and its annotated methods."""

    qualified_name: str
    project_code: str
    methods: Tuple[MethodDeclaration, ...] = ()
    namespace: str = field(default=None)

    def __post_init__(self):
        if self.namespace is None:
            namespace = (
                self.qualified_name.rsplit(".", 1)[0]
                if "." in self.qualified_name
                else ""
            )
            object.__setattr__(self, "namespace", namespace)

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    def render(self) -> str:
        return f"@LogBundle(projectCode={_quote(self.project_code)})"


# Document conversion


def _require(doc: Dict[str, Any], key: str, context: str) -> Any:
    if key not in doc or doc[key] is None:
        raise DeclarationError(f"Missing '{key}' in {context}")
    return doc[key]


def _require_str(doc: Dict[str, Any], key: str, context: str) -> str:
    value = _require(doc, key, context)
    if not isinstance(value, str):
        raise DeclarationError(f"'{key}' in {context} must be a string")
    return value


def _require_id(doc: Dict[str, Any], context: str) -> int:
    value = _require(doc, "id", context)
    # bool is an int subclass but never a valid message id
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeclarationError(f"'id' in {context} must be an integer, got {value!r}")
    return value


def _annotation_dict(doc: Dict[str, Any], key: str, context: str) -> Dict[str, Any]:
    raw = doc[key]
    if not isinstance(raw, dict):
        raise DeclarationError(f"'{key}' of {context} must be an object")
    return raw


def parameter_from_dict(doc: Dict[str, Any], context: str) -> ParameterDeclaration:
    if not isinstance(doc, dict):
        raise DeclarationError(f"Parameter in {context} must be an object")
    return ParameterDeclaration(
        type=_require_str(doc, "type", context),
        name=_require_str(doc, "name", context),
    )


def method_from_dict(doc: Dict[str, Any], bundle_name: str) -> MethodDeclaration:
    """Convert one method entry of a declaration document."""
    if not isinstance(doc, dict):
        raise DeclarationError(f"Method entries of {bundle_name} must be objects")

    name = _require_str(doc, "name", f"a method of {bundle_name}")
    context = f"{bundle_name}.{name}"

    parameters = tuple(
        parameter_from_dict(p, context) for p in doc.get("parameters") or []
    )

    message = None
    if doc.get("message") is not None:
        raw = _annotation_dict(doc, "message", context)
        message = MessageAnnotation(
            id=_require_id(raw, f"@Message of {context}"),
            value=_require_str(raw, "value", f"@Message of {context}"),
        )

    log_message = None
    if doc.get("log_message") is not None:
        raw = _annotation_dict(doc, "log_message", context)
        raw_level = raw.get("level", LogLevel.INFO.value)
        log_message = LogMessageAnnotation(
            id=_require_id(raw, f"@LogMessage of {context}"),
            value=_require_str(raw, "value", f"@LogMessage of {context}"),
            level=LogLevel.parse(raw_level) or raw_level,
        )

    get_logger = None
    if doc.get("get_logger") not in (None, False):
        get_logger = GetLoggerAnnotation()

    return MethodDeclaration(
        name=name,
        return_type=doc.get("return_type"),
        parameters=parameters,
        message=message,
        log_message=log_message,
        get_logger=get_logger,
    )


def bundle_from_dict(doc: Dict[str, Any]) -> BundleDeclaration:
    """
    Convert a single bundle entry of a declaration document.

    Args:
        doc: Mapping with ``interface``, ``project_code``, optional
            ``namespace`` and a ``methods`` list

    Returns:
        BundleDeclaration holding only the annotated methods

    Raises:
        DeclarationError: If the entry is structurally malformed
    """
    if not isinstance(doc, dict):
        raise DeclarationError(f"Bundle entry must be an object, got {type(doc).__name__}")

    qualified_name = _require_str(doc, "interface", "bundle declaration")
    project_code = _require_str(doc, "project_code", qualified_name)

    methods = []
    for entry in doc.get("methods") or []:
        method = method_from_dict(entry, qualified_name)
        # Methods without any recognised annotation are not emitted
        if method.is_annotated:
            methods.append(method)

    return BundleDeclaration(
        qualified_name=qualified_name,
        project_code=project_code,
        methods=tuple(methods),
        namespace=doc.get("namespace"),
    )


def bundles_from_document(doc: Union[Dict[str, Any], List[Any]]) -> List[BundleDeclaration]:
    """Convert a whole declaration document (``{"bundles": [...]}`` or a list)."""
    if isinstance(doc, dict):
        if "bundles" in doc:
            entries = doc["bundles"]
        elif "interface" in doc:
            entries = [doc]
        else:
            raise DeclarationError("Declaration document has no 'bundles' list")
    else:
        entries = doc

    if not isinstance(entries, list):
        raise DeclarationError("'bundles' must be a list")

    return [bundle_from_dict(entry) for entry in entries]


# Attribute names set by log_bundler.annotations
BUNDLE_MARKER = "__log_bundle__"
METHOD_MARKER = "__log_annotations__"
