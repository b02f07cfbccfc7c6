"""Exception hierarchy for the installer."""


class InstallerError(Exception):
    """Base class for all installer failures."""


class FlowError(InstallerError):
    """A question flow definition cannot be used."""


class QuestionOrderError(FlowError):
    """A question predicate references an answer that is not asked before it."""


class UnknownValidatorError(FlowError):
    """A question names a validator that is not registered."""


class AnswerValidationError(InstallerError):
    """A pre-supplied (headless) answer was rejected by its validator."""

    def __init__(self, question_id: str, message: str):
        super().__init__(f"{question_id}: {message}")
        self.question_id = question_id
        self.message = message


class StoreError(InstallerError):
    """Creating or removing a secret/config artifact failed."""


class LaunchError(InstallerError):
    """The stack launcher returned a failure."""
