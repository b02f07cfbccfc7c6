"""QuestionGraph - ordered questions with dependency checks."""

from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..errors import FlowError, QuestionOrderError, UnknownValidatorError
from ..validators import VALIDATORS
from .conditions import Condition
from .schema import Question


class QuestionGraph:
    """
    Ordered question list whose predicates only look backwards.

    Questions are registered one at a time. A question's ``when`` condition
    may only reference ids registered before it, so every predicate can be
    evaluated against the answers collected so far. Validator names are
    checked against the registry the engine will use.
    """

    def __init__(
        self,
        questions: Optional[Iterable[Question]] = None,
        validators: Optional[Mapping[str, Callable]] = None,
    ):
        self._entries: List[Tuple[Question, Optional[Condition]]] = []
        self._ids: Dict[str, int] = {}
        self.validators = VALIDATORS if validators is None else validators
        for question in questions or ():
            self.add(question)

    def add(self, question: Question) -> 'QuestionGraph':
        """Register the next question.

        Raises:
            QuestionOrderError: On duplicate ids or forward references
            UnknownValidatorError: If the validator is not registered
            FlowError: If the ``when`` expression cannot be parsed
        """
        if question.id in self._ids:
            raise QuestionOrderError(f"Duplicate question id: {question.id}")

        if question.validator and question.validator not in self.validators:
            raise UnknownValidatorError(
                f"Question {question.id} uses unknown validator '{question.validator}' "
                f"(known: {', '.join(sorted(self.validators))})"
            )

        try:
            condition = Condition(question.when) if question.when else None
        except ValueError as e:
            raise FlowError(f"Question {question.id}: {e}") from e

        if condition is not None:
            unknown = sorted(key for key in condition.keys if key not in self._ids)
            if unknown:
                raise QuestionOrderError(
                    f"Question {question.id} depends on {', '.join(unknown)} "
                    f"which is not asked before it"
                )

        self._ids[question.id] = len(self._entries)
        self._entries.append((question, condition))
        return self

    @property
    def ids(self) -> List[str]:
        return [question.id for question, _ in self._entries]

    def get(self, question_id: str) -> Question:
        return self._entries[self._ids[question_id]][0]

    def __iter__(self) -> Iterator[Tuple[Question, Optional[Condition]]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
