"""Tests for the declaration model, decorators and collector."""

import types
from typing import Optional

import pytest

import future_bundles
import sample_bundles
from log_bundler.annotations import log_bundle, log_message, message
from log_bundler.codegen.core.collector import (
    collect_bundles,
    collect_from_class,
    collect_from_module,
    type_descriptor,
)
from log_bundler.codegen.core.errors import DeclarationError
from log_bundler.codegen.core.schema import (
    AnnotationKind,
    BundleDeclaration,
    LogLevel,
    LogMessageAnnotation,
    MessageAnnotation,
    bundle_from_dict,
    bundles_from_document,
)


class TestBundleFromDict:
    """Tests for converting declaration documents."""

    def test_namespace_is_derived_from_interface(self, queue_bundle):
        assert queue_bundle.namespace == "org.example"
        assert queue_bundle.simple_name == "QueueMessages"
        assert queue_bundle.project_code == "AMQ1"

    def test_unannotated_methods_are_skipped(self, queue_bundle):
        names = [m.name for m in queue_bundle.methods]

        assert "helper" not in names
        assert len(names) == 7

    def test_parameters_keep_order(self, queue_bundle):
        method = next(m for m in queue_bundle.methods if m.name == "addressCreated")

        assert [(p.type, p.name) for p in method.parameters] == [
            ("String", "address"),
            ("int", "consumers"),
        ]

    def test_levels_are_parsed(self, queue_bundle):
        levels = {
            m.name: m.log_message.level for m in queue_bundle.methods if m.log_message
        }

        assert levels == {
            "pagingDisabled": LogLevel.WARN,
            "addressCreated": LogLevel.INFO,
            "deliveryFailed": LogLevel.ERROR,
        }

    def test_unknown_level_is_kept_raw(self, bundle_doc_factory):
        doc = bundle_doc_factory(
            "a.B",
            methods=[{"name": "m", "log_message": {"id": 1, "value": "v", "level": "TRACE"}}],
        )

        assert bundle_from_dict(doc).methods[0].log_message.level == "TRACE"

    def test_explicit_namespace_wins(self, bundle_doc_factory):
        doc = bundle_doc_factory("Messages")
        doc["namespace"] = "custom.place"

        assert bundle_from_dict(doc).namespace == "custom.place"

    def test_root_namespace_is_empty(self, bundle_doc_factory):
        assert bundle_from_dict(bundle_doc_factory("Messages")).namespace == ""

    @pytest.mark.parametrize(
        "method",
        [
            {"name": "m", "message": {"id": True, "value": "v"}},
            {"name": "m", "message": {"id": "1", "value": "v"}},
            {"name": "m", "message": {"value": "v"}},
            {"name": "m", "message": {"id": 1}},
            {"name": "m", "message": "text"},
            {"message": {"id": 1, "value": "v"}},
        ],
    )
    def test_malformed_methods_are_rejected(self, bundle_doc_factory, method):
        with pytest.raises(DeclarationError):
            bundle_from_dict(bundle_doc_factory("a.B", methods=[method]))

    def test_missing_project_code_is_rejected(self):
        with pytest.raises(DeclarationError):
            bundle_from_dict({"interface": "a.B", "methods": []})


class TestBundlesFromDocument:
    """Tests for whole declaration documents."""

    def test_bundles_list(self, queue_bundle_doc, order_bundle_doc):
        bundles = bundles_from_document({"bundles": [queue_bundle_doc, order_bundle_doc]})

        assert [b.qualified_name for b in bundles] == [
            "org.example.QueueMessages",
            "shop.messages.OrderMessages",
        ]

    def test_single_bundle_document(self, queue_bundle_doc):
        assert len(bundles_from_document(queue_bundle_doc)) == 1

    def test_bare_list(self, queue_bundle_doc):
        assert len(bundles_from_document([queue_bundle_doc])) == 1

    def test_document_without_bundles(self):
        with pytest.raises(DeclarationError):
            bundles_from_document({"something": "else"})


class TestAnnotationRendering:
    """Tests for the annotation comments."""

    def test_message(self):
        assert MessageAnnotation(100, "Queue {0}").render() == '@Message(id=100, value="Queue {0}")'

    def test_log_message(self):
        annotation = LogMessageAnnotation(7, "Hi", LogLevel.WARN)

        assert annotation.render() == '@LogMessage(id=7, value="Hi", level=WARN)'

    def test_bundle(self):
        bundle = BundleDeclaration("a.B", "AMQ")

        assert bundle.render() == '@LogBundle(projectCode="AMQ")'


class TestTypeDescriptor:
    """Tests for rendering Python annotations."""

    def test_builtin(self):
        assert type_descriptor(str) == "str"

    def test_qualified_class(self):
        assert type_descriptor(sample_bundles.QueueError) == "sample_bundles.QueueError"

    def test_string_annotation(self):
        assert type_descriptor("decimal.Decimal") == "decimal.Decimal"

    def test_none(self):
        assert type_descriptor(None) == "None"

    def test_optional_is_unwrapped(self):
        assert type_descriptor(Optional[str]) == "str"
        assert type_descriptor(sample_bundles.QueueError | None) == "sample_bundles.QueueError"


class TestCollector:
    """Tests for collecting decorated classes."""

    def test_collect_decorated_class(self):
        bundle = collect_from_class(sample_bundles.ServerMessages)

        assert bundle.qualified_name == "sample_bundles.ServerMessages"
        assert bundle.namespace == "sample_bundles"
        assert bundle.project_code == "AMQ"
        assert [m.name for m in bundle.methods] == [
            "queue_not_found",
            "address_full",
            "paging_disabled",
            "delivery_failed",
            "logger",
        ]

    def test_method_signatures(self):
        bundle = collect_from_class(sample_bundles.ServerMessages)
        methods = {m.name: m for m in bundle.methods}

        assert methods["queue_not_found"].return_type == "str"
        assert methods["queue_not_found"].parameters[0].name == "name"
        assert methods["address_full"].return_type == "sample_bundles.QueueError"
        assert methods["logger"].return_type == "logging.Logger"
        assert methods["logger"].kind == AnnotationKind.GET_LOGGER
        assert [p.type for p in methods["delivery_failed"].parameters] == ["str", "Exception"]
        assert methods["delivery_failed"].log_message.level == LogLevel.ERROR

    def test_undecorated_class_is_rejected(self):
        with pytest.raises(DeclarationError):
            collect_from_class(sample_bundles.PlainMessages)

    def test_collect_module(self):
        bundles = collect_from_module(sample_bundles)

        assert [b.simple_name for b in bundles] == ["ServerMessages"]

    def test_variadic_parameters_are_rejected(self):
        @log_bundle(project_code="X")
        class Variadic:
            @message(id=1, value="{}")
            def joined(self, *parts): ...

        with pytest.raises(DeclarationError):
            collect_from_class(Variadic)

    def test_untyped_parameters(self):
        @log_bundle(project_code="X")
        class Untyped:
            @log_message(id=1, value="{}")
            def event(self, payload): ...

        method = collect_from_class(Untyped).methods[0]

        assert method.parameters[0].type == "object"
        assert method.return_type is None

    def test_stacked_decorators_record_both_kinds(self):
        @log_bundle(project_code="X")
        class Stacked:
            @message(id=1, value="a")
            @log_message(id=2, value="b")
            def both(self): ...

        method = collect_from_class(Stacked).methods[0]

        assert method.kinds == [AnnotationKind.MESSAGE, AnnotationKind.LOG_MESSAGE]

    def test_mixed_sources_keep_discovery_order(self, queue_bundle_doc, order_bundle):
        bundles = collect_bundles([queue_bundle_doc, sample_bundles, order_bundle])

        assert [b.simple_name for b in bundles] == [
            "QueueMessages",
            "ServerMessages",
            "OrderMessages",
        ]

    def test_unsupported_source(self):
        with pytest.raises(DeclarationError):
            collect_bundles([types.SimpleNamespace()])


class TestPostponedAnnotations:
    """Tests for modules using ``from __future__ import annotations``."""

    def test_annotations_are_resolved(self):
        bundle = collect_from_class(future_bundles.FutureMessages)
        methods = {m.name: m for m in bundle.methods}

        assert methods["broken"].return_type == "future_bundles.FutureError"
        assert methods["broken"].parameters[0].type == "str"

    def test_optional_text_is_text(self):
        methods = {m.name: m for m in collect_from_class(future_bundles.FutureMessages).methods}

        assert methods["maybe"].return_type == "str"
        assert methods["maybe"].parameters[0].type == "str"
        assert methods["union"].return_type == "str"

    def test_generic_parameters_keep_their_form(self):
        methods = {m.name: m for m in collect_from_class(future_bundles.FutureMessages).methods}

        assert methods["seen"].parameters[0].type == "list[str]"

    def test_unresolvable_annotation_is_rejected(self):
        @log_bundle(project_code="X")
        class Dangling:
            @message(id=1, value="{}")
            def dangling(self, name: "NoSuchType") -> str: ...  # noqa: F821

        with pytest.raises(DeclarationError, match="resolve"):
            collect_from_class(Dangling)

    @pytest.mark.parametrize("annotation", ["list[str]", "int | str", "None"])
    def test_message_return_must_be_constructible(self, annotation):
        def render(self): ...

        render.__annotations__["return"] = annotation
        Returns = log_bundle(project_code="X")(
            type("Returns", (), {"render": message(id=1, value="v")(render)})
        )

        with pytest.raises(DeclarationError, match="must return"):
            collect_from_class(Returns)
