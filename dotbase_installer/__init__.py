"""dot.base installer - conditional questions and deployment provisioning."""

from .engine import ActionRunner, MockActionRunner, QuestionEngine, QuestionGraph, RealActionRunner, SpecLoader
from .install import build_pipeline, run_install
from .provisioning import PipelineState, ProvisioningPipeline, ProvisioningResult
from .settings import InstallerSettings, load_settings

__version__ = "1.0.0"

__all__ = [
    'ActionRunner',
    'MockActionRunner',
    'QuestionEngine',
    'QuestionGraph',
    'RealActionRunner',
    'SpecLoader',
    'build_pipeline',
    'run_install',
    'PipelineState',
    'ProvisioningPipeline',
    'ProvisioningResult',
    'InstallerSettings',
    'load_settings',
]
