"""
Declaration discovery.

Turns every supported declaration source into BundleDeclarations, one
per bundle interface, keeping discovery order. Only annotated methods
are collected; validation happens later.
"""

import inspect
import types
import typing
from typing import Any, Iterable, List, Optional

from ...logging_config import get_logger
from .errors import DeclarationError
from .schema import (
    BUNDLE_MARKER,
    METHOD_MARKER,
    BundleDeclaration,
    GetLoggerAnnotation,
    LogMessageAnnotation,
    MessageAnnotation,
    MethodDeclaration,
    ParameterDeclaration,
    bundles_from_document,
)

logger = get_logger(__name__)

# Parameter type used when a Python parameter has no annotation
UNTYPED = "object"


def _unwrap_optional(annotation: Any) -> Any:
    """``Optional[X]`` and ``X | None`` -> ``X``; anything else unchanged."""
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_class(annotation: Any) -> bool:
    # list[int] passes isinstance(..., type) on some interpreters
    return isinstance(annotation, type) and typing.get_origin(annotation) is None


def type_descriptor(annotation: Any) -> Optional[str]:
    """Render a resolved Python annotation as a type descriptor string."""
    if annotation is inspect.Signature.empty:
        return None
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, str):
        return annotation
    if annotation is None or annotation is type(None):
        return "None"
    if _is_class(annotation):
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)


def _check_message_return(annotation: Any, where: str) -> None:
    """A Message method returns text or a class built from it."""
    if annotation is inspect.Signature.empty:
        return
    resolved = _unwrap_optional(annotation)
    if not _is_class(resolved) or resolved is type(None):
        raise DeclarationError(
            f"{where} returns {annotation!r}; @message methods must return str "
            f"or a class constructed from the message"
        )


def _method_from_function(name: str, func: Any, owner: str) -> MethodDeclaration:
    markers = getattr(func, METHOD_MARKER, {})
    where = f"{owner}.{name}"

    try:
        signature = inspect.signature(func, eval_str=True)
    except (TypeError, ValueError) as e:
        raise DeclarationError(f"Cannot inspect {where}: {e}") from e
    except (NameError, AttributeError, SyntaxError) as e:
        raise DeclarationError(f"Cannot resolve the annotations of {where}: {e}") from e

    if MessageAnnotation in markers:
        _check_message_return(signature.return_annotation, where)

    parameters = []
    for index, parameter in enumerate(signature.parameters.values()):
        if index == 0 and parameter.name == "self":
            continue
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            raise DeclarationError(
                f"{where} uses *{parameter.name}; bundle methods need named parameters"
            )
        parameters.append(
            ParameterDeclaration(
                type=type_descriptor(parameter.annotation) or UNTYPED,
                name=parameter.name,
            )
        )

    return MethodDeclaration(
        name=name,
        return_type=type_descriptor(signature.return_annotation),
        parameters=tuple(parameters),
        message=markers.get(MessageAnnotation),
        log_message=markers.get(LogMessageAnnotation),
        get_logger=markers.get(GetLoggerAnnotation),
    )


def collect_from_class(cls: type) -> BundleDeclaration:
    """
    Build a BundleDeclaration from a class marked with ``@log_bundle``.

    Methods are read in definition order from the class body itself;
    inherited methods belong to the interface that declares them.

    Raises:
        DeclarationError: If the class is not a bundle
    """
    project_code = cls.__dict__.get(BUNDLE_MARKER)
    if project_code is None:
        raise DeclarationError(f"{cls.__qualname__} is not marked with @log_bundle")

    qualified_name = f"{cls.__module__}.{cls.__name__}"
    methods = []

    for name, attr in vars(cls).items():
        func = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
        if not callable(func) or not getattr(func, METHOD_MARKER, None):
            continue
        methods.append(_method_from_function(name, func, qualified_name))

    logger.debug("Collected %s with %d annotated methods", qualified_name, len(methods))

    return BundleDeclaration(
        qualified_name=qualified_name,
        project_code=project_code,
        methods=tuple(methods),
        namespace=cls.__module__,
    )


def collect_from_module(module: types.ModuleType) -> List[BundleDeclaration]:
    """Collect every bundle class defined in a module, in definition order."""
    return [
        collect_from_class(obj)
        for obj in vars(module).values()
        if isinstance(obj, type)
        and obj.__module__ == module.__name__
        and BUNDLE_MARKER in obj.__dict__
    ]


def collect_bundles(sources: Iterable[Any]) -> List[BundleDeclaration]:
    """
    Collect bundles from mixed declaration sources.

    Args:
        sources: BundleDeclarations, declaration documents (dicts or
            lists), bundle classes or modules, in discovery order

    Returns:
        One BundleDeclaration per bundle interface, in discovery order
    """
    bundles = []

    for source in sources:
        if isinstance(source, BundleDeclaration):
            bundles.append(source)
        elif isinstance(source, (dict, list)):
            bundles.extend(bundles_from_document(source))
        elif isinstance(source, type):
            bundles.append(collect_from_class(source))
        elif isinstance(source, types.ModuleType):
            bundles.extend(collect_from_module(source))
        else:
            raise DeclarationError(
                f"Unsupported declaration source: {type(source).__name__}"
            )

    logger.info("Collected %d bundle(s)", len(bundles))
    return bundles
