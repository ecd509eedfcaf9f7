"""Script execution for scene files."""

from .engine import ScriptContext, ScriptEngine, PythonScriptEngine

__all__ = ['ScriptContext', 'ScriptEngine', 'PythonScriptEngine']
