"""
Log bundle code generation.

Compiles log bundle declarations into implementation classes.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.collector import collect_bundles
from .core.errors import GeneratorError
from .core.schema import BundleDeclaration, LogLevel
from .core.config import GeneratorConfig, ConfigManager, load_config


def generate_bundles(sources, language="java", config=None, output_dir=None):
    """
    Collect bundles from declaration sources and generate their implementations.

    Args:
        sources: Declaration documents, BundleDeclarations, bundle classes
            or modules, in discovery order
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or file path)
        output_dir: Directory to write generated units under

    Returns:
        GenerationResult for the round
    """
    generator = get_generator(language, config)

    try:
        bundles = collect_bundles(sources)
    except GeneratorError as e:
        return GenerationResult.error(str(e), exception=e)

    return generate_code(generator, bundles, output_dir)


def quick_generate(declarations, language="java", **options):
    """
    Quick code generation from a declaration document.

    Args:
        declarations: Declaration document (dict/list) or its JSON text
        language: Target language
        **options: Generator options

    Returns:
        Generated code of every unit, concatenated
    """
    if isinstance(declarations, str):
        import json

        declarations = json.loads(declarations)

    result = generate_bundles([declarations], language, options or None)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "BundleDeclaration",
    "LogLevel",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_code",
    "generate_bundles",
    "quick_generate",
    "collect_bundles",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
