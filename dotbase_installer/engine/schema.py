"""Pydantic models for question flow validation."""

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

AnswerValue = Union[bool, str, List[str]]

INPUT_KINDS = ('string', 'boolean', 'enum', 'multi_enum')


class Choice(BaseModel):
    """One entry of the closed option set of an enum question."""

    value: str = Field(..., description="Value stored in the answer map")
    label: Optional[str] = Field(None, description="Text shown to the operator")

    @property
    def display(self) -> str:
        return self.label or self.value


class Question(BaseModel):
    """
    A single question in an install flow.

    A question can be:
    - Free text (string)
    - A yes/no confirmation (boolean)
    - A single choice from a closed option set (enum)
    - Several choices from a closed option set (multi_enum)
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Unique key in the answer map")
    type: str = Field(..., description="Input kind: string, boolean, enum, multi_enum")
    prompt: str = Field(..., description="Prompt text to display to the operator")
    hint: Optional[str] = Field(None, description="Example or remark shown below the prompt")
    section: Optional[str] = Field(None, description="Section header shown before the prompt")
    default_value: Optional[AnswerValue] = Field(None, description="Default used on empty input")
    validator: Optional[str] = Field(None, description="Validator name (e.g., 'hostname')")
    when: Optional[str] = Field(None, description="Ask only if this condition holds (e.g., 'USE_SENTRY')")
    options: List[Choice] = Field(default_factory=list, description="Options for enum kinds")

    @model_validator(mode='after')
    def _check_kind(self) -> 'Question':
        if self.type not in INPUT_KINDS:
            raise ValueError(f"Unknown question type '{self.type}' for {self.id}")
        if self.type in ('enum', 'multi_enum') and not self.options:
            raise ValueError(f"Question {self.id} of type {self.type} needs options")
        return self

    @property
    def option_values(self) -> List[str]:
        return [option.value for option in self.options]


class QuestionFlow(BaseModel):
    """Ordered list of questions making up one prompting session."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Flow identifier (e.g., 'install')")
    version: Union[str, float] = Field(..., description="Flow version")
    description: str = Field(..., description="Human-readable description")
    questions: List[Question] = Field(default_factory=list, description="Questions in asking order")
