"""
Tests for the importer error taxonomy and its formatting.
"""

from pathlib import Path

from sceneimport.shared.errors import (
    ImportScopeError,
    InvalidPathError,
    RecursiveImportError,
    SceneImportError,
    ScriptExecutionError,
    format_import_error,
)

A = Path("/scenes/a.pyscene")
B = Path("/scenes/b.pyscene")


class TestSceneImportError:
    def test_str_includes_code_and_path(self):
        err = InvalidPathError("scenes/a.pyscene", "Expected absolute path.")
        text = str(err)
        assert "error[E1001]" in text
        assert "Expected absolute path." in text
        assert "scenes/a.pyscene" in text

    def test_format_without_color(self):
        err = RecursiveImportError(A, "Scene is imported recursively.")
        out = format_import_error(err, color=False)
        assert out == f"error[E1002]: Scene is imported recursively.\n --> {A}"

    def test_format_with_color_contains_escapes(self):
        err = RecursiveImportError(A, "Scene is imported recursively.")
        assert "\033[" in format_import_error(err, color=True)

    def test_all_errors_share_base(self):
        assert issubclass(ScriptExecutionError, SceneImportError)
        assert not issubclass(ImportScopeError, SceneImportError)


class TestScriptExecutionError:
    def test_message_includes_cause(self):
        err = ScriptExecutionError(A, ZeroDivisionError("division by zero"))
        assert "division by zero" in err.message
        assert err.cause.__class__ is ZeroDivisionError

    def test_cause_without_message_uses_type_name(self):
        err = ScriptExecutionError(A, KeyboardInterrupt())
        assert "KeyboardInterrupt" in err.message

    def test_root_cause_and_chain(self):
        cycle = RecursiveImportError(A, "Scene is imported recursively.")
        inner = ScriptExecutionError(B, cycle)
        outer = ScriptExecutionError(A, inner)
        assert outer.root_cause is cycle
        assert outer.import_chain == [A, B, A]
        assert str(B) in outer.message
        assert "imported recursively" in outer.message


class TestImportScopeError:
    def test_str(self):
        assert str(ImportScopeError("broken", error_code="E9005")) == "[E9005] broken"
