"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and
the driver that runs one generation round over a set of bundles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Any, Optional, Set, Tuple, Union
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import DuplicateOutputError, GeneratorError, OutputWriteError, UnknownLevelError
from .escaping import format_literal
from .naming import (
    NameSanitizer,
    NamingCase,
    impl_class_name,
    namespace_path,
    output_identity,
)
from .schema import AnnotationKind, BundleDeclaration, LogLevel
from .templates import TemplateEngine, create_template_engine
from .validator import GenerationContext, ValidatedMethod, validate_bundle

logger = get_logger(__name__)


class ReturnShape(Enum):
    """How a Message method turns the formatted text into its return value."""

    TEXT = "text"  # return the string itself
    CONSTRUCT = "construct"  # construct the declared type from the string


@dataclass(frozen=True)
class GeneratedUnit:
    """One generated source file."""

    identity: str
    path: str
    code: str
    bundle: BundleDeclaration


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    #: Template rendering a whole implementation unit
    impl_template = "impl.j2"

    #: Generated locals, renamed when a parameter already uses the name
    local_variables: Tuple[str, ...] = ("return_string",)
    local_case = NamingCase.SNAKE_CASE

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java', '.py')."""
        pass

    @property
    @abstractmethod
    def text_types(self) -> Set[str]:
        """Type descriptors that denote the target's string type."""
        pass

    @property
    @abstractmethod
    def logger_type(self) -> str:
        """Type of the logging handle held by generated classes."""
        pass

    @property
    @abstractmethod
    def level_methods(self) -> Dict[LogLevel, str]:
        """Logger method invoked for each level."""
        pass

    @property
    def default_text_type(self) -> str:
        """Return type used when a Message method declares none."""
        return sorted(self.text_types)[0]

    def create_sanitizer(self) -> NameSanitizer:
        """Sanitizer for names local to one generated method."""
        return NameSanitizer()

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    # Naming

    def class_name(self, bundle: BundleDeclaration) -> str:
        return impl_class_name(bundle.simple_name, self.config.impl_suffix)

    def output_identity(self, bundle: BundleDeclaration) -> str:
        return output_identity(bundle.namespace, self.class_name(bundle))

    def output_path(self, bundle: BundleDeclaration) -> str:
        """Relative path of the unit generated for a bundle."""
        directory = namespace_path(bundle.namespace)
        filename = f"{self.class_name(bundle)}{self.file_extension}"
        return f"{directory}/{filename}" if directory else filename

    # Per-method decisions, all taken at generation time

    def parameter_signature(self, parameters) -> str:
        """Render a parameter list in the target syntax."""
        return ", ".join(f"{p.type} {p.name}" for p in parameters)

    def level_method(self, level: LogLevel) -> str:
        try:
            return self.level_methods[level]
        except KeyError:
            raise UnknownLevelError(level) from None

    def return_shape(self, return_type: Optional[str]) -> ReturnShape:
        if return_type is None or return_type in self.text_types:
            return ReturnShape.TEXT
        return ReturnShape.CONSTRUCT

    def method_context(
        self, validated: ValidatedMethod, bundle: BundleDeclaration
    ) -> Dict[str, Any]:
        """Build the template data for one validated method."""
        method = validated.method
        annotation = validated.annotation

        sanitizer = self.create_sanitizer()
        sanitizer.add_used_names(p.name for p in method.parameters)
        local_names = {
            name: sanitizer.sanitize_name(name, self.local_case)
            for name in self.local_variables
        }

        data = {
            "name": method.name,
            "kind": validated.kind.value,
            "comment": annotation.render() if self.config.add_comments else None,
            "parameters": [{"type": p.type, "name": p.name} for p in method.parameters],
            "signature": self.parameter_signature(method.parameters),
            "call_args": [p.name for p in method.parameters],
            "has_parameters": bool(method.parameters),
            "locals": local_names,
        }

        if validated.kind == AnnotationKind.GET_LOGGER:
            data["return_type"] = self.logger_type
            return data

        data["literal"] = format_literal(bundle.project_code, annotation.id, annotation.value)

        if validated.kind == AnnotationKind.MESSAGE:
            return_type = method.return_type or self.default_text_type
            data["return_type"] = return_type
            data["return_shape"] = self.return_shape(return_type).value
        else:
            data["level_method"] = self.level_method(validated.level)

        return data

    def bundle_context(
        self, bundle: BundleDeclaration, methods: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Build the template data for a whole unit. Subclasses extend this."""
        return {
            "generator_name": f"{type(self).__module__}.{type(self).__name__}",
            "bundle": bundle,
            "bundle_comment": bundle.render() if self.config.add_comments else None,
            "add_header": self.config.add_header,
            "class_name": self.class_name(bundle),
            "identity": self.output_identity(bundle),
            "logger_type": self.logger_type,
            "methods": methods,
        }

    def generate_single_bundle(
        self, bundle: BundleDeclaration, context: GenerationContext
    ) -> GeneratedUnit:
        """
        Validate and render the implementation of one bundle.

        Args:
            bundle: Bundle to generate
            context: Current round state (message id registry, warnings)

        Returns:
            GeneratedUnit with the rendered code
        """
        validated = validate_bundle(bundle, context)
        methods = [self.method_context(v, bundle) for v in validated]

        code = self.render_template(self.impl_template, self.bundle_context(bundle, methods))

        return GeneratedUnit(
            identity=self.output_identity(bundle),
            path=self.output_path(bundle),
            code=self.format_code(code),
            bundle=bundle,
        )

    def validate_bundles(self, bundles: List[BundleDeclaration]) -> List[str]:
        """
        Check bundles for suspicious but legal declarations.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for bundle in bundles:
            if not bundle.methods:
                warnings.append(f"Bundle '{bundle.qualified_name}' has no annotated methods")

            if not bundle.project_code:
                warnings.append(f"Bundle '{bundle.qualified_name}' has an empty project code")

            for method in bundle.methods:
                where = f"{bundle.qualified_name}.{method.name}"
                if not method.name.isidentifier():
                    warnings.append(f"Method name {where} is not a valid identifier")

                if method.kind == AnnotationKind.GET_LOGGER and method.parameters:
                    warnings.append(f"Parameters of {where} are ignored by @GetLogger")

                seen = set()
                for parameter in method.parameters:
                    if parameter.name in seen:
                        warnings.append(f"Duplicate parameter {parameter.name} in {where}")
                    seen.add(parameter.name)

        return warnings

    def check_bundles(self, bundles: List[BundleDeclaration]) -> None:
        """
        Reject declarations this target cannot express.

        Raises:
            DeclarationError: On the first such declaration
        """

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines, ends the
        unit with exactly one newline and applies the configured line ending.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        return self.config.line_ending.join(formatted_lines) + self.config.line_ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        units: List[GeneratedUnit] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        written: List[Path] = None,
    ):
        """
        Initialize generation result.

        Args:
            units: Generated units, one per bundle, in discovery order
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            written: Files written to disk, if an output directory was given
        """
        self.units = units or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.written = written or []
        self.success = True
        self.error_message = None
        self.exception = None

    @property
    def code(self) -> str:
        """All generated units concatenated, for display."""
        return "\n".join(unit.code for unit in self.units)

    def unit_for(self, identity: str) -> Optional[GeneratedUnit]:
        for unit in self.units:
            if unit.identity == identity:
                return unit
        return None

    @classmethod
    def error(
        cls, message: str, exception: Exception = None, warnings: List[str] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(warnings=warnings)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def check_output_identities(
    generator: CodeGenerator, bundles: List[BundleDeclaration]
) -> None:
    """Raise DuplicateOutputError if two bundles would generate the same unit."""
    seen = set()
    for bundle in bundles:
        identity = generator.output_identity(bundle)
        path = generator.output_path(bundle)
        if identity in seen or path in seen:
            raise DuplicateOutputError(identity)
        seen.update((identity, path))


def write_units(units: Iterable[GeneratedUnit], output_dir: Union[str, Path]) -> List[Path]:
    """
    Write generated units below an output directory.

    Raises:
        OutputWriteError: If a file or directory cannot be created
    """
    root = Path(output_dir)
    written = []

    for unit in units:
        path = root / unit.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(unit.code)
        except OSError as e:
            raise OutputWriteError(path, str(e)) from e
        logger.info("Wrote %s", path)
        written.append(path)

    return written


def generate_code(
    generator: CodeGenerator,
    bundles: Iterable[BundleDeclaration],
    output_dir: Optional[Union[str, Path]] = None,
    context: Optional[GenerationContext] = None,
) -> GenerationResult:
    """
    Run one generation round with error handling.

    Every bundle is validated and rendered before anything is written, so a
    failed round leaves no output behind.

    Args:
        generator: Code generator instance
        bundles: Bundles in discovery order
        output_dir: Directory to write units under (defaults to config.output_dir)
        context: Round state; a fresh one is created when omitted

    Returns:
        GenerationResult with units, warnings, and metadata
    """
    if context is None:
        context = GenerationContext(config=generator.config)
    if output_dir is None:
        output_dir = generator.config.output_dir

    try:
        bundles = list(bundles)

        for warning in generator.validate_bundles(bundles):
            context.warn(warning)

        generator.check_bundles(bundles)
        check_output_identities(generator, bundles)

        units = []
        for bundle in bundles:
            logger.info("Generating %s", generator.output_identity(bundle))
            units.append(generator.generate_single_bundle(bundle, context))

        written = write_units(units, output_dir) if output_dir is not None else []

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "bundle_count": len(bundles),
            "method_count": sum(len(bundle.methods) for bundle in bundles),
            "message_ids": context.registry.ids(),
            "outputs": [unit.identity for unit in units],
        }

        return GenerationResult(units, context.warnings, metadata, written)

    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(str(e), exception=e, warnings=context.warnings)
    except Exception as e:
        logger.error("Code generation failed unexpectedly: %s", e, exc_info=True)
        return GenerationResult.error(
            f"Code generation failed: {str(e)}", exception=e, warnings=context.warnings
        )
