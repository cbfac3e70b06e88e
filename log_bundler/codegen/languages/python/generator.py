"""
Python code generator implementation.

Generates subclasses of log bundle interfaces that log through the
standard library ``logging`` module.
"""

import keyword
from typing import Dict, List, Any, Optional, Set
from pathlib import Path

from ...core.config import GeneratorConfig, load_config
from ...core.errors import DeclarationError
from ...core.generator import CodeGenerator
from ...core.naming import NameSanitizer, is_qualified_name
from ...core.schema import BundleDeclaration, LogLevel
from .naming import create_python_sanitizer, impl_module_name

DEFAULT_RUNTIME_MODULE = "log_bundler.runtime"

# Modules the generated unit imports unconditionally
_PREIMPORTED = {"builtins", "logging"}

# Attributes of the generated class
_INSTANCE_ATTRIBUTES = {"_logger", "INSTANCE"}

# Module level names of the generated unit, besides imported packages
RUNTIME_ALIASES = {"format_message": "_format_message", "get_logger": "_get_logger"}
_MODULE_NAMES = {"self", "logging"} | set(RUNTIME_ALIASES.values())


class PythonGenerator(CodeGenerator):
    """Code generator for Python classes logging through ``logging``."""

    impl_template = "impl.py.j2"
    local_variables = ("return_string", "formatted")

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self.runtime_module = self.config.custom.get("runtime_module", DEFAULT_RUNTIME_MODULE)

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return ".py"

    @property
    def text_types(self) -> Set[str]:
        return {"str", "builtins.str"}

    @property
    def default_text_type(self) -> str:
        return "str"

    @property
    def logger_type(self) -> str:
        return "logging.Logger"

    @property
    def level_methods(self) -> Dict[LogLevel, str]:
        # Logger.warn is a deprecated alias
        return {
            LogLevel.WARN: "warning",
            LogLevel.INFO: "info",
            LogLevel.ERROR: "error",
        }

    def create_sanitizer(self) -> NameSanitizer:
        return create_python_sanitizer()

    def module_name(self, bundle: BundleDeclaration) -> str:
        return impl_module_name(bundle.namespace, self.class_name(bundle))

    def output_path(self, bundle: BundleDeclaration) -> str:
        return self.module_name(bundle).replace(".", "/") + self.file_extension

    def parameter_signature(self, parameters) -> str:
        return ", ".join(["self"] + [f"{p.name}: {p.type}" for p in parameters])

    def get_import_statements(self, bundle: BundleDeclaration) -> List[str]:
        """Modules providing the dotted types used in method signatures."""
        modules = set()
        for method in bundle.methods:
            descriptors = [p.type for p in method.parameters]
            if method.return_type:
                descriptors.append(method.return_type)
            for descriptor in descriptors:
                if is_qualified_name(descriptor):
                    modules.add(descriptor.rsplit(".", 1)[0])
        return sorted(modules - _PREIMPORTED)

    def bundle_context(
        self, bundle: BundleDeclaration, methods: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        context = super().bundle_context(bundle, methods)
        context.update(
            {
                "runtime_module": self.runtime_module,
                "runtime": RUNTIME_ALIASES,
                "imports": self.get_import_statements(bundle),
            }
        )
        return context

    def validate_bundles(self, bundles: List[BundleDeclaration]) -> List[str]:
        warnings = super().validate_bundles(bundles)

        for bundle in bundles:
            if not bundle.namespace:
                warnings.append(
                    f"Bundle '{bundle.qualified_name}' has no module; "
                    f"the generated class cannot import its interface"
                )

        return warnings

    def check_bundles(self, bundles: List[BundleDeclaration]) -> None:
        for bundle in bundles:
            # Packages bound by the unit's own import statements
            taken = _MODULE_NAMES | {m.split(".", 1)[0] for m in self.get_import_statements(bundle)}

            for method in bundle.methods:
                where = f"{bundle.qualified_name}.{method.name}"
                if method.name in _INSTANCE_ATTRIBUTES:
                    raise DeclarationError(
                        f"Method {where} would replace the '{method.name}' attribute "
                        f"of the generated class"
                    )
                for parameter in method.parameters:
                    if not parameter.name.isidentifier() or keyword.iskeyword(parameter.name):
                        raise DeclarationError(
                            f"Parameter '{parameter.name}' of {where} is not a Python identifier"
                        )
                    if parameter.name in taken:
                        raise DeclarationError(
                            f"Parameter '{parameter.name}' of {where} shadows a name "
                            f"the generated body uses"
                        )


def create_python_generator(config: Optional[Dict[str, Any]] = None) -> PythonGenerator:
    """Create a Python generator, merging overrides into the Python defaults."""
    return PythonGenerator(load_config("python", custom_config=config))
