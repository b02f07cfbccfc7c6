"""Install run - ask the questions, then provision."""

import logging
from typing import Any, Callable, Dict, Optional

from .engine.engine import QuestionEngine
from .engine.loader import SpecLoader
from .engine.runner import ActionRunner
from .provisioning.actions import InstallActions
from .provisioning.credentials import DerivedSecrets, generate_derived_secrets
from .provisioning.launcher import StackLauncher
from .provisioning.pipeline import PipelineState, ProvisioningPipeline, ProvisioningResult
from .provisioning.store import ArtifactStore, DockerArtifactStore
from .provisioning.templates import TemplateRenderer
from .settings import InstallerSettings

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to the dot.base installer! This tool will walk you through\n"
    "the installation and configuration of dot.base. Just follow the steps\n"
    "and we got you up and running in no time.\n"
)


def build_pipeline(
    settings: InstallerSettings,
    runner: ActionRunner,
    secrets: Optional[ArtifactStore] = None,
    configs: Optional[ArtifactStore] = None,
    derive: Callable[[], DerivedSecrets] = generate_derived_secrets,
) -> ProvisioningPipeline:
    """Wire the default collaborators into a provisioning pipeline."""
    actions = InstallActions(
        settings=settings,
        runner=runner,
        renderer=TemplateRenderer(settings.template_dir),
        secrets=secrets or DockerArtifactStore(runner, kind='secret'),
        configs=configs or DockerArtifactStore(runner, kind='config'),
        launcher=StackLauncher(runner, settings.launch_command),
        derive=derive,
    )
    return ProvisioningPipeline(actions.build_stages())


def run_install(
    settings: InstallerSettings,
    runner: ActionRunner,
    headless_inputs: Optional[Dict[str, Any]] = None,
    pipeline: Optional[ProvisioningPipeline] = None,
) -> ProvisioningResult:
    """
    Run one installation.

    Args:
        settings: Installer settings
        runner: ActionRunner for prompts and side effects
        headless_inputs: Pre-supplied answers; None asks interactively
        pipeline: Pipeline to run (default: build_pipeline(settings, runner))

    Returns:
        The provisioning result; failures are already reported to the operator
    """
    runner.display(WELCOME)

    graph = SpecLoader(settings.flows_dir).load_graph(settings.flow)
    answers = QuestionEngine(runner).evaluate(graph, headless_inputs)
    logger.info("Collected %d answers", len(answers))

    if pipeline is None:
        pipeline = build_pipeline(settings, runner)

    result = pipeline.run(answers)

    if result.state is PipelineState.SKIPPED:
        runner.display("\nNo instance created. Run the installer again when you are ready.")
    elif result.state is PipelineState.ABORTED:
        runner.display(f"\n✗ Installation failed at step '{result.failed_step}'.")
        runner.display(result.reason)
    else:
        runner.display(f"\n✓ dot.base is starting on {answers.get('HOSTNAME')}.")
        runner.display(f"  Deployment files: {settings.output_dir}")

    return result
