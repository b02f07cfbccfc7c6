"""Provisioning - turns validated answers into a running deployment."""

from .actions import EXISTING_INSTALLATION_MESSAGE, InstallActions
from .credentials import DerivedSecrets, generate_derived_secrets, generate_password, generate_username
from .launcher import StackLauncher
from .pipeline import (
    PipelineState,
    ProvisioningContext,
    ProvisioningPipeline,
    ProvisioningResult,
    ProvisioningStep,
    Stage,
    StepKind,
)
from .store import ArtifactStore, DockerArtifactStore
from .templates import TemplateRenderer

__all__ = [
    'EXISTING_INSTALLATION_MESSAGE',
    'InstallActions',
    'DerivedSecrets',
    'generate_derived_secrets',
    'generate_password',
    'generate_username',
    'StackLauncher',
    'PipelineState',
    'ProvisioningContext',
    'ProvisioningPipeline',
    'ProvisioningResult',
    'ProvisioningStep',
    'Stage',
    'StepKind',
    'ArtifactStore',
    'DockerArtifactStore',
    'TemplateRenderer',
]
