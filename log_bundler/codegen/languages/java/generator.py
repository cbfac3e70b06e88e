"""
Java code generator implementation.

Generates slf4j-backed implementations of log bundle interfaces.
"""

from typing import Dict, List, Any, Optional, Set
from pathlib import Path

from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator
from ...core.naming import NameSanitizer, NamingCase
from ...core.schema import BundleDeclaration, LogLevel
from .naming import create_java_sanitizer, simple_type_name

DEFAULT_LOGGER_TYPE = "org.slf4j.Logger"
DEFAULT_LOGGER_FACTORY = "org.slf4j.LoggerFactory"


class JavaGenerator(CodeGenerator):
    """Code generator for Java classes logging through slf4j."""

    impl_template = "impl.java.j2"
    local_case = NamingCase.CAMEL_CASE

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Java generator with configuration."""
        super().__init__(config)

        self.logger_factory = self.config.custom.get("logger_factory", DEFAULT_LOGGER_FACTORY)
        self._logger_type = self.config.custom.get("logger_type", DEFAULT_LOGGER_TYPE)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Java templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extension(self) -> str:
        return ".java"

    @property
    def text_types(self) -> Set[str]:
        return {"java.lang.String", "String"}

    @property
    def default_text_type(self) -> str:
        return "java.lang.String"

    @property
    def logger_type(self) -> str:
        return self._logger_type

    @property
    def level_methods(self) -> Dict[LogLevel, str]:
        return {
            LogLevel.WARN: "warn",
            LogLevel.INFO: "info",
            LogLevel.ERROR: "error",
        }

    def create_sanitizer(self) -> NameSanitizer:
        return create_java_sanitizer()

    def bundle_context(
        self, bundle: BundleDeclaration, methods: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        context = super().bundle_context(bundle, methods)
        context.update(
            {
                "logger_factory": self.logger_factory,
                "logger_simple_name": simple_type_name(self.logger_type),
                "factory_simple_name": simple_type_name(self.logger_factory),
            }
        )
        return context


def create_java_generator(config: Optional[Dict[str, Any]] = None) -> JavaGenerator:
    """Create a Java generator, merging overrides into the Java defaults."""
    return JavaGenerator(load_config("java", custom_config=config))
