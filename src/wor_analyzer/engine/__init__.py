from wor_analyzer.engine.interpreter import (
    ChunkResult,
    InterpreterStateError,
    LogInterpreter,
    ParseResult,
    parse_log,
)

__all__ = [
    "ChunkResult",
    "InterpreterStateError",
    "LogInterpreter",
    "ParseResult",
    "parse_log",
]
