"""Tests for the template engine and language factories."""

import pytest

from log_bundler.codegen.core.naming import NameSanitizer, NamingCase, convert_case
from log_bundler.codegen.core.templates import TemplateEngine, TemplateError
from log_bundler.codegen.languages import create_java_generator, create_python_generator


class TestTemplateEngine:
    """Tests for TemplateEngine."""

    def test_comment_filter_keeps_one_line(self):
        rendered = TemplateEngine().render_string("# {{ text | comment }}", {"text": 'a "b"\nc'})

        assert rendered == '# a "b"\\nc'

    def test_only_comment_filter_is_registered(self):
        # literals reach templates already escaped
        with pytest.raises(TemplateError):
            TemplateEngine().render_string("{{ text | literal }}", {"text": "a"})

    def test_undefined_variables_fail(self):
        with pytest.raises(TemplateError):
            TemplateEngine().render_string("{{ missing }}", {})

    def test_memory_template_overrides_file(self, java_generator, queue_bundle):
        java_generator.template_engine.add_template("impl.java.j2", "class {{ class_name }} {}\n")

        assert java_generator.template_exists("impl.java.j2")
        assert java_generator.render_template("impl.java.j2", {"class_name": "X"}) == "class X {}\n"

    def test_missing_template(self):
        assert not TemplateEngine().template_exists("nope.j2")


class TestNaming:
    """Tests for case conversion and sanitizing."""

    @pytest.mark.parametrize(
        "target, expected",
        [
            (NamingCase.SNAKE_CASE, "http_server_impl"),
            (NamingCase.CAMEL_CASE, "httpServerImpl"),
            (NamingCase.PASCAL_CASE, "HttpServerImpl"),
        ],
    )
    def test_convert_case(self, target, expected):
        assert convert_case("HTTPServer_impl", target) == expected

    def test_reserved_words_and_reset(self):
        sanitizer = NameSanitizer({"class"})

        assert sanitizer.sanitize_name("class") == "class_"
        assert sanitizer.sanitize_name("class") == "class__1"

        sanitizer.reset_used_names()

        assert sanitizer.sanitize_name("class") == "class_"


def test_language_factories_merge_defaults():
    java = create_java_generator({"logger_factory": "com.acme.Loggers"})
    python = create_python_generator({"runtime_module": "acme.runtime"})

    assert java.logger_factory == "com.acme.Loggers"
    assert java.logger_type == "org.slf4j.Logger"
    assert python.runtime_module == "acme.runtime"
