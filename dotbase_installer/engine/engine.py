"""Question engine - asks a question graph and returns the answer map."""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import AnswerValidationError, UnknownValidatorError
from ..validators import VALIDATORS
from .graph import QuestionGraph
from .runner import ActionRunner
from .schema import AnswerValue, Question

logger = logging.getLogger(__name__)

TRUE_WORDS = ('y', 'yes', 'true', '1')
FALSE_WORDS = ('n', 'no', 'false', '0')

BOOLEAN_MESSAGE = "Please answer yes or no."
CHOICE_MESSAGE = "Please choose from the listed options."


class QuestionEngine:
    """
    Evaluates a QuestionGraph with dependency injection.

    Key responsibilities:
    - Visit questions strictly in order, skipping those whose condition fails
    - Collect input through the injected runner
    - Coerce raw input to the question's kind and re-ask on rejection
    - Support headless mode for non-interactive installs and tests
    """

    def __init__(self, runner: ActionRunner, validators: Optional[Dict[str, Callable]] = None):
        """
        Initialize the question engine.

        Args:
            runner: ActionRunner implementation for input and output
            validators: Validator registry (default: built-in validators)
        """
        self.runner = runner
        self.validators: Dict[str, Callable] = dict(VALIDATORS if validators is None else validators)

    def evaluate(self, graph: QuestionGraph, headless_inputs: Optional[Dict[str, Any]] = None) -> Mapping[str, AnswerValue]:
        """
        Ask every question of the graph once, in order.

        Args:
            graph: Ordered questions
            headless_inputs: Optional dict of {question_id: raw answer}
                            If None: INTERACTIVE mode (prompt via runner)
                            If provided: HEADLESS mode (use dict values)

        Returns:
            Read-only answer map. Skipped questions have no key.

        Raises:
            AnswerValidationError: In headless mode, when an answer is rejected
            UnknownValidatorError: If a question names a validator this engine
                does not have; raised before anything is asked
        """
        for question, _ in graph:
            if question.validator and question.validator not in self.validators:
                raise UnknownValidatorError(
                    f"Question {question.id} uses unknown validator '{question.validator}'"
                )

        answers: Dict[str, AnswerValue] = {}

        for question, condition in graph:
            if condition is not None and not condition(MappingProxyType(answers)):
                logger.debug("Skipping %s (condition '%s' is false)", question.id, condition.expression)
                continue

            if headless_inputs is None:
                answers[question.id] = self._ask(question, MappingProxyType(answers))
            else:
                answers[question.id] = self._answer_headless(question, headless_inputs, MappingProxyType(answers))

        return MappingProxyType(answers)

    def _ask(self, question: Question, answers: Mapping[str, Any]) -> AnswerValue:
        """Prompt until the input is accepted."""
        if question.section:
            self.runner.display(f"\n=== {question.section} ===")

        while True:
            if question.hint:
                self.runner.display(f"! {question.hint}")

            if question.type in ('enum', 'multi_enum'):
                self.runner.display("")  # Blank line before options
                for i, option in enumerate(question.options, 1):
                    self.runner.display(f"  {i}. {option.display}")
                self.runner.display("")  # Blank line after options

            raw = self.runner.get_input(question.prompt, self._display_default(question))

            try:
                return self._accept(question, raw, answers)
            except ValueError as e:
                # Show error and re-prompt
                self.runner.display(f"Error: {e}")

    def _answer_headless(self, question: Question, inputs: Dict[str, Any], answers: Mapping[str, Any]) -> AnswerValue:
        raw = inputs.get(question.id)
        try:
            return self._accept(question, raw, answers)
        except ValueError as e:
            # No one to re-prompt, fail fast
            raise AnswerValidationError(question.id, str(e)) from None

    def _accept(self, question: Question, raw: Any, answers: Mapping[str, Any]) -> AnswerValue:
        """Coerce and validate one raw answer.

        Raises:
            ValueError: With the message to show the operator
        """
        value = self._coerce(question, raw)

        if question.validator:
            validator_fn = self.validators[question.validator]
            value = validator_fn(value, answers)

        return value

    def _coerce(self, question: Question, raw: Any) -> AnswerValue:
        if question.type == 'boolean':
            return self._coerce_boolean(question, raw)
        if question.type == 'enum':
            return self._coerce_enum(question, raw)
        if question.type == 'multi_enum':
            return self._coerce_multi_enum(question, raw)

        if raw is None or raw == '':
            return '' if question.default_value is None else str(question.default_value)
        return str(raw)

    def _coerce_boolean(self, question: Question, raw: Any) -> bool:
        if isinstance(raw, bool):
            return raw
        text = '' if raw is None else str(raw).strip().lower()
        if not text:
            return bool(question.default_value)
        if text in TRUE_WORDS:
            return True
        if text in FALSE_WORDS:
            return False
        raise ValueError(BOOLEAN_MESSAGE)

    def _coerce_enum(self, question: Question, raw: Any) -> str:
        text = '' if raw is None else str(raw).strip()
        if not text:
            if question.default_value is None:
                raise ValueError(CHOICE_MESSAGE)
            text = str(question.default_value)
        return self._resolve_choice(question, text)

    def _coerce_multi_enum(self, question: Question, raw: Any) -> List[str]:
        if isinstance(raw, (list, tuple)):
            items = [str(item).strip() for item in raw]
        else:
            text = '' if raw is None else str(raw).strip()
            if not text:
                default = question.default_value
                if not default:
                    return []
                items = list(default) if isinstance(default, list) else [str(default)]
            else:
                items = [item.strip() for item in text.split(',')]

        selected = {self._resolve_choice(question, item) for item in items if item}
        # Keep declaration order of the options
        return [value for value in question.option_values if value in selected]

    def _resolve_choice(self, question: Question, text: str) -> str:
        """Map an option number or value onto the closed option set."""
        if text.isdigit():
            index = int(text)
            if 1 <= index <= len(question.options):
                return question.options[index - 1].value
        if text in question.option_values:
            return text
        raise ValueError(CHOICE_MESSAGE)

    def _display_default(self, question: Question) -> Any:
        default = question.default_value
        if isinstance(default, list):
            return ', '.join(default)
        return default
