"""Command line interface for the dot.base installer."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .engine.loader import SpecLoader
from .engine.runner import RealActionRunner
from .errors import AnswerValidationError, FlowError
from .install import run_install
from .logging_utils import configure_logging
from .settings import load_settings

# Everything that can go wrong reading and checking a flow file
FLOW_LOAD_ERRORS = (FlowError, FileNotFoundError, yaml.YAMLError, ValidationError)

app = typer.Typer(help="Install and configure a dot.base instance.", no_args_is_help=True)


@app.callback()
def main():
    """dot.base installer."""


@app.command()
def install(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Installer settings YAML"),
    answers: Optional[Path] = typer.Option(None, "--answers", help="Answer YAML for a non-interactive install"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for rendered files"),
    recreate: Optional[bool] = typer.Option(
        None, "--recreate/--no-recreate", help="Remove existing secrets/configs before creating them"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo every command"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
):
    """Ask for the configuration, provision secrets/configs and start the stack."""
    settings = load_settings(
        config,
        output_dir=output_dir,
        recreate_artifacts=recreate,
        verbose=verbose or None,
        log_level=log_level,
    )
    configure_logging(settings.log_level)
    runner = RealActionRunner(verbose=settings.verbose)

    headless_inputs = None
    if answers is not None:
        with open(answers, 'r') as f:
            headless_inputs = yaml.safe_load(f) or {}

    if not runner.check_docker():
        runner.display("✗ Docker is not available. Please install Docker and try again.")
        raise typer.Exit(code=1)

    try:
        result = run_install(settings, runner, headless_inputs=headless_inputs)
    except AnswerValidationError as e:
        runner.display(f"✗ Invalid answer for {e.question_id}: {e.message}")
        raise typer.Exit(code=2)
    except FLOW_LOAD_ERRORS as e:
        runner.display(f"✗ Cannot load flow '{settings.flow}': {e}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        runner.display("\nInstallation aborted.")
        raise typer.Exit(code=130)

    if not result.succeeded:
        raise typer.Exit(code=1)


@app.command("show-flow")
def show_flow(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Installer settings YAML"),
):
    """List the questions of the configured flow and when they are asked."""
    settings = load_settings(config)
    try:
        graph = SpecLoader(settings.flows_dir).load_graph(settings.flow)
    except FLOW_LOAD_ERRORS as e:
        typer.echo(f"✗ Cannot load flow '{settings.flow}': {e}")
        raise typer.Exit(code=1)

    for question, condition in graph:
        line = f"{question.id} ({question.type})"
        if condition is not None:
            line += f"  when {condition.expression}"
        typer.echo(line)


if __name__ == "__main__":
    app()
