"""Installer settings - where files go, artifact names, launch command."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_FILE = 'installer-config.yaml'


class ArtifactNames(BaseModel):
    """Names of the secrets and configs in the orchestrator store."""

    model_config = ConfigDict(extra="forbid")

    realm_secret: str = "dotbase_realm"
    tls_cert_secret: str = "dotbase_tls_cert"
    tls_key_secret: str = "dotbase_tls_key"
    proxy_config: str = "dotbase_proxy_conf"
    custom_ca_config: str = "dotbase_custom_ca"


class InstallerSettings(BaseModel):
    """
    Settings for one installer run.

    Loaded from installer-config.yaml when present; every field has a
    default so the file is optional.
    """

    model_config = ConfigDict(extra="forbid")

    flow: str = Field("install", description="Question flow to ask")
    flows_dir: Path = Field(PACKAGE_DIR / "flows", description="Directory with <flow>.yaml files")
    template_dir: Path = Field(PACKAGE_DIR / "templates", description="Directory with *.j2 templates")
    output_dir: Path = Field(Path("deployment"), description="Where rendered files are written")
    realm_template: str = "realm.json.j2"
    proxy_template: str = "proxy.conf.j2"
    parameters_template: str = "parameters.yml.j2"
    stack_template: str = "docker-stack.yml.j2"
    artifacts: ArtifactNames = Field(default_factory=ArtifactNames)
    recreate_artifacts: bool = Field(False, description="Remove existing artifacts before creating them")
    launch_command: List[str] = Field(
        default_factory=lambda: ["docker", "stack", "deploy", "--compose-file", "{stack}", "dotbase"],
        description="Stack launch command; {stack} and {parameters} are replaced by the rendered file paths",
    )
    support_contact: str = "support@dotbase.org"
    verbose: bool = False
    log_level: str = "WARNING"

    @property
    def realm_path(self) -> Path:
        return self.output_dir / "realm.json"

    @property
    def proxy_path(self) -> Path:
        return self.output_dir / "proxy.conf"

    @property
    def parameters_path(self) -> Path:
        return self.output_dir / "parameters.yml"

    @property
    def stack_path(self) -> Path:
        return self.output_dir / "docker-stack.yml"


def load_settings(path: Optional[Union[str, Path]] = None, **overrides: Any) -> InstallerSettings:
    """Load settings from YAML, then apply non-None overrides.

    Args:
        path: Settings file (default: ./installer-config.yaml if it exists)
        **overrides: Field values taking precedence over the file

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValidationError: If the file does not match InstallerSettings
    """
    data: Dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Installer config not found: {config_path}")
    else:
        config_path = Path(DEFAULT_CONFIG_FILE)

    if config_path.exists():
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

    data.update({key: value for key, value in overrides.items() if value is not None})

    if os.environ.get('DOTBASE_INSTALLER_VERBOSE'):
        data['verbose'] = True

    return InstallerSettings(**data)
