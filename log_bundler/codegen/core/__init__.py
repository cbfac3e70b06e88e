"""
Core code generation components.

Provides the metadata model, collector, validator, escaping and the
base generator used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratedUnit,
    GenerationResult,
    ReturnShape,
    generate_code,
    write_units,
)
from .errors import (
    GeneratorError,
    DeclarationError,
    ValidationError,
    ConflictingAnnotationError,
    DuplicateMessageIdError,
    UnknownLevelError,
    DuplicateOutputError,
    OutputWriteError,
)
from .schema import (
    AnnotationKind,
    LogLevel,
    MessageAnnotation,
    LogMessageAnnotation,
    GetLoggerAnnotation,
    ParameterDeclaration,
    MethodDeclaration,
    BundleDeclaration,
    bundle_from_dict,
    bundles_from_document,
)
from .collector import collect_bundles, collect_from_class, collect_from_module
from .validator import GenerationContext, MessageIdRegistry, ValidatedMethod, validate_method
from .escaping import escape_template, unescape_literal, format_literal
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratedUnit",
    "GenerationResult",
    "ReturnShape",
    "generate_code",
    "write_units",
    # Errors
    "GeneratorError",
    "DeclarationError",
    "ValidationError",
    "ConflictingAnnotationError",
    "DuplicateMessageIdError",
    "UnknownLevelError",
    "DuplicateOutputError",
    "OutputWriteError",
    # Metadata model
    "AnnotationKind",
    "LogLevel",
    "MessageAnnotation",
    "LogMessageAnnotation",
    "GetLoggerAnnotation",
    "ParameterDeclaration",
    "MethodDeclaration",
    "BundleDeclaration",
    "bundle_from_dict",
    "bundles_from_document",
    # Collection and validation
    "collect_bundles",
    "collect_from_class",
    "collect_from_module",
    "GenerationContext",
    "MessageIdRegistry",
    "ValidatedMethod",
    "validate_method",
    # Escaping
    "escape_template",
    "unescape_literal",
    "format_literal",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
