"""Question engine - core infrastructure for the data-driven install flow."""

from .conditions import Condition
from .engine import QuestionEngine
from .graph import QuestionGraph
from .loader import SpecLoader
from .runner import ActionRunner, RealActionRunner, MockActionRunner
from .schema import Choice, Question, QuestionFlow

__all__ = [
    'QuestionEngine',
    'QuestionGraph',
    'Condition',
    'SpecLoader',
    'ActionRunner',
    'RealActionRunner',
    'MockActionRunner',
    'Choice',
    'Question',
    'QuestionFlow',
]
