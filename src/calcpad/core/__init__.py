"""Core calcpad functionality: expression evaluation, configuration, sessions."""

from .config import CalcpadConfig, find_config, load_config
from .errors import CalcpadError, ConfigError, ErrorContext, EvaluationError
from .session import EditBuffer, History, HistoryEntry, Session

__all__ = [
    "CalcpadConfig",
    "find_config",
    "load_config",
    "CalcpadError",
    "ConfigError",
    "ErrorContext",
    "EvaluationError",
    "EditBuffer",
    "History",
    "HistoryEntry",
    "Session",
]
