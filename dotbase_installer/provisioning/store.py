"""Secret/config store - named artifacts consumed by the deployed stack."""

from abc import ABC, abstractmethod
from typing import Optional

from ..engine.runner import ActionRunner
from ..errors import StoreError

# Swarm refuses zero-length secret and config data
PLACEHOLDER_CONTENT = '\n'


class ArtifactStore(ABC):
    """Interface for an orchestrator secret or config store."""

    @abstractmethod
    def create(self, name: str, source: Optional[str] = None, content: Optional[str] = None) -> None:
        """Create an artifact from a file or from literal content.

        Args:
            name: Artifact name
            source: Path of the file holding the content
            content: Literal content; '' creates a placeholder with no
                meaningful content

        Raises:
            StoreError: If the store refuses (typically: name already exists)
        """
        pass

    @abstractmethod
    def remove(self, name: str) -> None:
        """Remove an artifact.

        Raises:
            StoreError: If removal fails, including when it does not exist
        """
        pass


class DockerArtifactStore(ArtifactStore):
    """Docker swarm secrets (kind='secret') or configs (kind='config')."""

    def __init__(self, runner: ActionRunner, kind: str = 'secret'):
        if kind not in ('secret', 'config'):
            raise ValueError(f"Unknown artifact kind: {kind}")
        self.runner = runner
        self.kind = kind

    def create(self, name: str, source: Optional[str] = None, content: Optional[str] = None) -> None:
        if (source is None) == (content is None):
            raise ValueError("Provide exactly one of source or content")

        if source is not None:
            result = self.runner.run_shell(['docker', self.kind, 'create', name, str(source)])
        else:
            # '-' makes docker read the content from stdin
            result = self.runner.run_shell(
                ['docker', self.kind, 'create', name, '-'], input=content or PLACEHOLDER_CONTENT
            )

        if result.get('returncode') != 0:
            raise StoreError(
                f"Failed to create {self.kind} {name}: {result.get('stderr', '').strip()}"
            )

    def remove(self, name: str) -> None:
        result = self.runner.run_shell(['docker', self.kind, 'rm', name])
        if result.get('returncode') != 0:
            raise StoreError(
                f"Failed to remove {self.kind} {name}: {result.get('stderr', '').strip()}"
            )
