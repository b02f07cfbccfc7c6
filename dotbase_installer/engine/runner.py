"""Runners - the only place the installer touches the terminal, files or docker."""

import os
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

ShellResult = Dict[str, Any]

VERBOSE_ENV = 'DOTBASE_INSTALLER_VERBOSE'
PRIVATE_FILE_MODE = 0o600


def _shell_result(stdout: str = '', stderr: str = '', returncode: int = 0) -> ShellResult:
    return {'stdout': stdout, 'stderr': stderr, 'returncode': returncode}


class ActionRunner(ABC):
    """Side effects needed by the question engine and the provisioning steps."""

    @abstractmethod
    def run_shell(self, command: List[str], cwd: Optional[str] = None, input: Optional[str] = None) -> ShellResult:
        """Run a command without a shell.

        Args:
            command: Program and its arguments
            cwd: Working directory (default: current)
            input: Text piped to the program's stdin

        Returns:
            Dict with 'stdout', 'stderr' and 'returncode'. Failing to start
            the program is reported here too, never raised.
        """

    @abstractmethod
    def check_docker(self) -> bool:
        """True when the docker CLI answers."""

    @abstractmethod
    def display(self, message: str) -> None:
        """Show operator-facing text."""

    @abstractmethod
    def get_input(self, prompt: str, default: Any = None) -> Any:
        """Ask the operator for one answer.

        An empty reply yields ``default`` when there is one, '' otherwise.
        """

    @abstractmethod
    def write_file(self, path: str, content: str) -> None:
        """Write ``content`` to ``path``, readable by the owner only."""

    @abstractmethod
    def make_dirs(self, path: str) -> None:
        """Create ``path`` and missing parents; existing directories are fine."""


class RealActionRunner(ActionRunner):
    """Talks to the real terminal, filesystem and docker daemon."""

    def __init__(self, verbose: bool = False):
        """
        Args:
            verbose: Echo commands and file writes. Also switched on by the
                DOTBASE_INSTALLER_VERBOSE environment variable.
        """
        self.verbose = verbose or bool(os.environ.get(VERBOSE_ENV))

    def _echo(self, message: str) -> None:
        if self.verbose:
            print(f"[VERBOSE] {message}")

    def run_shell(self, command: List[str], cwd: Optional[str] = None, input: Optional[str] = None) -> ShellResult:
        self._echo(f"$ {' '.join(command)}  (in {cwd or os.getcwd()})")

        try:
            completed = subprocess.run(command, cwd=cwd, input=input, capture_output=True, text=True)
        except FileNotFoundError as e:
            self._echo(f"{command[0]} is not installed or not on PATH")
            return _shell_result(stderr=f"FileNotFoundError: {e}", returncode=127)
        except OSError as e:
            self._echo(f"Could not start {command[0]}: {e}")
            return _shell_result(stderr=f"{type(e).__name__}: {e}", returncode=1)

        if completed.returncode != 0:
            self._echo(f"exit {completed.returncode}: {completed.stderr.strip()}")

        return _shell_result(completed.stdout, completed.stderr, completed.returncode)

    def check_docker(self) -> bool:
        return self.run_shell(['docker', '--version'])['returncode'] == 0

    def display(self, message: str) -> None:
        print(message)

    def get_input(self, prompt: str, default: Any = None) -> Any:
        if default is None or default == '':
            reply = input(f"{prompt}: ").strip()
            print()
            return reply

        if isinstance(default, bool):
            hint = 'Y/n' if default else 'y/N'
        else:
            hint = str(default)

        reply = input(f"{prompt} [{hint}]: ").strip()
        print()
        return reply or default

    def write_file(self, path: str, content: str) -> None:
        self._echo(f"write {path} ({len(content)} bytes)")
        # Rendered files carry generated credentials
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIVATE_FILE_MODE)
        os.fchmod(fd, PRIVATE_FILE_MODE)
        with os.fdopen(fd, 'w') as f:
            f.write(content)

    def make_dirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)


class MockActionRunner(ActionRunner):
    """
    In-memory runner for tests.

    Every call is appended to ``calls`` as a tuple starting with the method
    name. Scripted operator replies go in ``input_queue``; written files land
    in ``files``. ``responses['run_shell']`` controls shell results and may be
    a single result dict, a dict keyed by command tuples, or a callable
    taking the command list.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.responses: Dict[str, Any] = {}
        self.input_queue: List[Any] = []
        self.files: Dict[str, str] = {}

    def _shell_response(self, command: List[str]) -> ShellResult:
        response = self.responses.get('run_shell')
        if response is None:
            return _shell_result()
        if callable(response):
            return response(command)
        if 'returncode' in response:
            return response
        return response.get(tuple(command)) or _shell_result()

    def run_shell(self, command: List[str], cwd: Optional[str] = None, input: Optional[str] = None) -> ShellResult:
        self.calls.append(('run_shell', command, cwd, input))
        return self._shell_response(command)

    def check_docker(self) -> bool:
        self.calls.append(('check_docker',))
        return self.responses.get('check_docker', True)

    def display(self, message: str) -> None:
        self.calls.append(('display', message))

    def get_input(self, prompt: str, default: Any = None) -> Any:
        self.calls.append(('get_input', prompt, default))
        reply = self.input_queue.pop(0) if self.input_queue else ''
        # Same empty-reply rule as the real terminal
        if reply:
            return reply
        return default if default is not None else ''

    def write_file(self, path: str, content: str) -> None:
        self.calls.append(('write_file', path, content))
        self.files[path] = content

    def make_dirs(self, path: str) -> None:
        self.calls.append(('make_dirs', path))

    def calls_named(self, name: str) -> List[tuple]:
        """Recorded calls of one method, e.g. 'run_shell'."""
        return [call for call in self.calls if call[0] == name]

    @property
    def displayed(self) -> str:
        """Everything passed to display(), newline separated."""
        return '\n'.join(call[1] for call in self.calls_named('display'))
