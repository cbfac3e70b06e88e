"""Decorators declaring log bundles on Python classes.

A bundle is usually an abstract class whose methods describe messages::

    @log_bundle(project_code="AMQ")
    class ServerMessages(abc.ABC):

        @message(id=119000, value="Queue {} does not exist")
        def queue_not_found(self, name: str) -> str: ...

        @log_message(id=222000, value="Paging is disabled", level=LogLevel.WARN)
        def paging_disabled(self) -> None: ...

        @get_logger
        def logger(self) -> logging.Logger: ...

The decorators only record metadata; ``log_bundler.codegen`` collects it
and generates the implementing class.
"""

from typing import Callable, TypeVar, Union

from .codegen.core.schema import (
    BUNDLE_MARKER,
    METHOD_MARKER,
    GetLoggerAnnotation,
    LogLevel,
    LogMessageAnnotation,
    MessageAnnotation,
)

F = TypeVar("F", bound=Callable)
C = TypeVar("C", bound=type)


def _mark(func: F, annotation) -> F:
    # Copy so a function wrapped by several decorators never shares state
    markers = dict(getattr(func, METHOD_MARKER, {}))
    markers[type(annotation)] = annotation
    setattr(func, METHOD_MARKER, markers)
    return func


def log_bundle(project_code: str) -> Callable[[C], C]:
    """Mark a class as a log bundle whose message codes start with project_code."""

    def decorate(cls: C) -> C:
        setattr(cls, BUNDLE_MARKER, project_code)
        return cls

    return decorate


def message(id: int, value: str) -> Callable[[F], F]:
    """The method returns (or builds its return type from) the formatted message."""
    annotation = MessageAnnotation(id=id, value=value)
    return lambda func: _mark(func, annotation)


def log_message(
    id: int, value: str, level: Union[LogLevel, str] = LogLevel.INFO
) -> Callable[[F], F]:
    """The method logs the formatted message at the given level."""
    annotation = LogMessageAnnotation(id=id, value=value, level=LogLevel.parse(level) or level)
    return lambda func: _mark(func, annotation)


def get_logger(func: F = None):
    """The method returns the bundle's logger. Usable as ``@get_logger`` or ``@get_logger()``."""
    if func is None:
        return lambda f: _mark(f, GetLoggerAnnotation())
    return _mark(func, GetLoggerAnnotation())
