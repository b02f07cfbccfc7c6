"""Stack launcher - starts the dot.base stack from the rendered deployment files."""

from typing import List, Optional

from ..engine.runner import ActionRunner
from ..errors import LaunchError


class StackLauncher:
    """Runs the configured launch command.

    ``{parameters}`` and ``{stack}`` in the command are replaced by the paths
    of the rendered parameters file and stack definition.
    """

    def __init__(self, runner: ActionRunner, command: List[str]):
        if not command:
            raise ValueError("Launch command cannot be empty")
        self.runner = runner
        self.command = list(command)

    def build_command(self, parameters_path: str, stack_path: Optional[str] = None) -> List[str]:
        if stack_path is None and any('{stack}' in part for part in self.command):
            raise ValueError("Launch command refers to {stack} but no stack file was given")

        paths = {'{parameters}': str(parameters_path), '{stack}': str(stack_path or '')}
        command = []
        for part in self.command:
            for placeholder, path in paths.items():
                part = part.replace(placeholder, path)
            command.append(part)
        return command

    def launch(self, parameters_path: str, stack_path: Optional[str] = None) -> str:
        """Launch the stack.

        Returns:
            Captured standard output of the launch command

        Raises:
            LaunchError: If the command exits non-zero
        """
        result = self.runner.run_shell(self.build_command(parameters_path, stack_path))
        if result.get('returncode') != 0:
            stderr = result.get('stderr', '').strip()
            raise LaunchError(f"Launching the stack failed (exit {result.get('returncode')}): {stderr}")
        return result.get('stdout', '')
