"""Provisioning pipeline - ordered stages from answers to a running stack."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .credentials import DerivedSecrets

logger = logging.getLogger(__name__)

GATE_KEY = 'CREATE_INSTANCE'


class PipelineState(str, Enum):
    NOT_STARTED = 'not_started'
    TEMPLATES_RENDERED = 'templates_rendered'
    SECRETS_CREATED = 'secrets_created'
    CONFIGS_CREATED = 'configs_created'
    DERIVED_SECRETS_GENERATED = 'derived_secrets_generated'
    PARAMETERS_RENDERED = 'parameters_rendered'
    LAUNCHED = 'launched'
    ABORTED = 'aborted'
    SKIPPED = 'skipped'


class StepKind(str, Enum):
    CRITICAL = 'critical'  # failure aborts the pipeline
    BEST_EFFORT = 'best_effort'  # failure is recorded and ignored


@dataclass
class ProvisioningContext:
    """State shared by the steps of one run.

    ``answers`` is the frozen operator input. Generated credentials live in
    ``derived`` and only meet the answers in ``render_context()``.
    """

    answers: Mapping[str, Any]
    derived: Optional[DerivedSecrets] = None
    launch_output: Optional[str] = None

    def render_context(self) -> Dict[str, Any]:
        if self.derived is None:
            return dict(self.answers)
        return self.derived.merged_with(self.answers)


@dataclass(frozen=True)
class ProvisioningStep:
    """A single pipeline action."""

    name: str
    action: Callable[[ProvisioningContext], None]
    kind: StepKind = StepKind.CRITICAL


@dataclass(frozen=True)
class Stage:
    """Steps whose joint success moves the pipeline to ``state``.

    When ``failure_message`` is set, any critical failure inside the stage is
    reported with that message instead of the underlying error.
    """

    state: PipelineState
    steps: Sequence[ProvisioningStep]
    failure_message: Optional[str] = None


@dataclass
class ProvisioningResult:
    state: PipelineState
    ran_steps: List[str] = field(default_factory=list)
    ignored_failures: List[Tuple[str, str]] = field(default_factory=list)
    failed_step: Optional[str] = None
    reason: Optional[str] = None
    launch_output: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state in (PipelineState.LAUNCHED, PipelineState.SKIPPED)


class ProvisioningPipeline:
    """
    Runs stages strictly in order.

    A critical step failure moves the pipeline to ABORTED and no further
    step runs. Nothing already created is rolled back.
    """

    def __init__(self, stages: Sequence[Stage], gate_key: str = GATE_KEY):
        self.stages = list(stages)
        self.gate_key = gate_key

    def run(self, answers: Mapping[str, Any]) -> ProvisioningResult:
        """Provision a deployment from the operator's answers.

        Args:
            answers: Answer map from the question engine

        Returns:
            ProvisioningResult; ``succeeded`` is False only when aborted
        """
        if not answers.get(self.gate_key):
            logger.info("%s not confirmed, nothing to provision", self.gate_key)
            return ProvisioningResult(state=PipelineState.SKIPPED)

        ctx = ProvisioningContext(answers=MappingProxyType(dict(answers)))
        result = ProvisioningResult(state=PipelineState.NOT_STARTED)

        for stage in self.stages:
            for step in stage.steps:
                logger.info("Running step %s", step.name)
                try:
                    step.action(ctx)
                except Exception as e:
                    if step.kind is StepKind.BEST_EFFORT:
                        logger.debug("Ignoring failure of best-effort step %s: %s", step.name, e)
                        result.ignored_failures.append((step.name, str(e)))
                        continue

                    logger.error("Step %s failed: %s", step.name, e)
                    result.state = PipelineState.ABORTED
                    result.failed_step = step.name
                    result.reason = stage.failure_message or str(e)
                    result.launch_output = ctx.launch_output
                    return result

                result.ran_steps.append(step.name)

            result.state = stage.state
            logger.debug("Pipeline state: %s", stage.state.value)

        result.launch_output = ctx.launch_output
        return result
