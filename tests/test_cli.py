"""Tests for the command line interface."""

import io
import json

import pytest

from log_bundler.cli import main


@pytest.fixture
def declarations_file(tmp_path, queue_bundle_doc):
    path = tmp_path / "bundles.json"
    path.write_text(json.dumps({"bundles": [queue_bundle_doc]}), encoding="utf-8")
    return path


class TestGenerateCommand:
    """Tests for ``log-bundler generate``."""

    def test_writes_output_directory(self, declarations_file, tmp_path):
        out = tmp_path / "generated"

        assert main(["generate", str(declarations_file), "-o", str(out)]) == 0
        assert (out / "org" / "example" / "QueueMessages_impl.java").exists()

    def test_python_target(self, declarations_file, tmp_path):
        out = tmp_path / "generated"

        assert main(["generate", str(declarations_file), "-l", "py", "-o", str(out)]) == 0
        assert (out / "org" / "example_queue_messages_impl.py").exists()

    def test_prints_without_output_directory(self, declarations_file, capsys):
        assert main(["generate", str(declarations_file), "--no-header", "--verbose"]) == 0

        assert "QueueMessages_impl" in capsys.readouterr().out

    def test_custom_suffix(self, declarations_file, tmp_path):
        out = tmp_path / "generated"

        main(["generate", str(declarations_file), "--impl-suffix", "Impl", "-o", str(out)])

        code = (out / "org" / "example" / "QueueMessagesImpl.java").read_text(encoding="utf-8")
        assert "public class QueueMessagesImpl implements QueueMessages" in code

    def test_no_comments(self, declarations_file, tmp_path):
        out = tmp_path / "generated"

        main(["generate", str(declarations_file), "--no-comments", "-o", str(out)])

        code = (out / "org" / "example" / "QueueMessages_impl.java").read_text(encoding="utf-8")
        assert "@Message" not in code

    def test_reads_stdin(self, queue_bundle_doc, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(queue_bundle_doc)))
        out = tmp_path / "generated"

        assert main(["generate", "--stdin", "-o", str(out)]) == 0
        assert (out / "org" / "example" / "QueueMessages_impl.java").exists()

    def test_failed_round_exits_nonzero(self, tmp_path, queue_bundle_doc):
        duplicate = dict(queue_bundle_doc, interface="org.example.Duplicate")
        path = tmp_path / "bundles.json"
        path.write_text(json.dumps([queue_bundle_doc, duplicate]), encoding="utf-8")
        out = tmp_path / "generated"

        assert main(["generate", str(path), "-o", str(out)]) == 1
        assert not out.exists()

    def test_strict_mode(self, tmp_path, bundle_doc_factory):
        doc = bundle_doc_factory(
            "a.Overlap",
            methods=[{"name": "m", "message": {"id": 1, "value": "a"}, "get_logger": True}],
        )
        path = tmp_path / "overlap.json"
        path.write_text(json.dumps(doc), encoding="utf-8")

        assert main(["generate", str(path)]) == 0
        assert main(["generate", str(path), "--strict"]) == 1

    def test_missing_input(self):
        assert main(["generate"]) == 1

    def test_missing_file(self, tmp_path):
        assert main(["generate", str(tmp_path / "absent.json")]) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        assert main(["generate", str(path)]) == 1

    def test_unsupported_language(self, declarations_file):
        assert main(["generate", str(declarations_file), "-l", "cobol"]) == 1

    def test_bad_config_file(self, declarations_file, tmp_path):
        assert main(["generate", str(declarations_file), "--config", str(tmp_path / "x.json")]) == 1


class TestInformationCommands:
    """Tests for the informational options."""

    def test_list_languages(self, capsys):
        assert main(["generate", "--list-languages"]) == 0

        out = capsys.readouterr().out
        assert "java" in out
        assert "python" in out

    def test_language_info(self, capsys):
        assert main(["generate", "--language-info", "java"]) == 0

        assert "org.slf4j.Logger" in capsys.readouterr().out

    def test_unknown_language_info(self):
        assert main(["generate", "--language-info", "cobol"]) == 1

    def test_no_command_prints_help(self):
        assert main([]) == 1
