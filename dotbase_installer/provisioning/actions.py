"""Install actions - the concrete steps of the provisioning pipeline.

Key Design Decision: Empty Placeholders
=======================================
The deployed stack mounts every secret and config by name. When a feature
is switched off (no HTTPS, no custom CA) the artifact is still created, with
placeholder content (a single newline, since swarm refuses empty data), so
the stack definition never has to change shape.
"""

from typing import Any, Callable, Dict, List, Optional

from ..engine.runner import ActionRunner
from ..settings import InstallerSettings
from .credentials import DerivedSecrets, generate_derived_secrets
from .launcher import StackLauncher
from .pipeline import PipelineState, ProvisioningContext, ProvisioningStep, Stage, StepKind
from .store import ArtifactStore
from .templates import TemplateRenderer

EXISTING_INSTALLATION_MESSAGE = (
    "Failed to create the dot.base secrets and configs. "
    "This usually means artifacts of an existing dot.base installation are still present. "
    "Running multiple dot.base installations on one host is not supported. "
    "Remove the old installation or rerun with --recreate. "
    "If the problem persists, contact {support_contact}."
)


def uses_https(answers) -> bool:
    """HTTPS flag; flows without the question imply HTTPS when a certificate was given."""
    if 'USE_HTTPS' in answers:
        return bool(answers['USE_HTTPS'])
    return 'TLS_CERT_PATH' in answers


def uses_custom_ca(answers) -> bool:
    return bool(answers.get('USE_CUSTOM_CA')) and bool(answers.get('CUSTOM_CA_PATH'))


class InstallActions:
    """
    Step actions bound to their collaborators.

    Every method taking ``ctx`` is a pipeline action.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        runner: ActionRunner,
        renderer: TemplateRenderer,
        secrets: ArtifactStore,
        configs: ArtifactStore,
        launcher: StackLauncher,
        derive: Callable[[], DerivedSecrets] = generate_derived_secrets,
    ):
        self.settings = settings
        self.runner = runner
        self.renderer = renderer
        self.secrets = secrets
        self.configs = configs
        self.launcher = launcher
        self.derive = derive

    # Templates

    def prepare_output_dir(self, ctx: ProvisioningContext) -> None:
        self.runner.make_dirs(str(self.settings.output_dir))

    def render_realm(self, ctx: ProvisioningContext) -> None:
        self._render(ctx, self.settings.realm_template, self.settings.realm_path)

    def render_proxy_config(self, ctx: ProvisioningContext) -> None:
        self._render(ctx, self.settings.proxy_template, self.settings.proxy_path)

    def render_parameters(self, ctx: ProvisioningContext) -> None:
        self._render(ctx, self.settings.parameters_template, self.settings.parameters_path)

    def render_stack(self, ctx: ProvisioningContext) -> None:
        self._render(ctx, self.settings.stack_template, self.settings.stack_path)

    def template_context(self, ctx: ProvisioningContext) -> Dict[str, Any]:
        """Answers and derived secrets plus the artifact names and file paths."""
        context = ctx.render_context()
        context['artifacts'] = self.settings.artifacts.model_dump()
        context['parameters_path'] = str(self.settings.parameters_path)
        return context

    def _render(self, ctx: ProvisioningContext, template_name: str, output_path) -> None:
        content = self.renderer.render(template_name, self.template_context(ctx))
        self.runner.write_file(str(output_path), content)
        self.runner.display(f"✓ Rendered {output_path}")

    # Secrets

    def create_realm_secret(self, ctx: ProvisioningContext) -> None:
        self._create(self.secrets, self.settings.artifacts.realm_secret, source=str(self.settings.realm_path))

    def create_tls_cert_secret(self, ctx: ProvisioningContext) -> None:
        self._create_optional(self.secrets, self.settings.artifacts.tls_cert_secret,
                              ctx.answers.get('TLS_CERT_PATH') if uses_https(ctx.answers) else None)

    def create_tls_key_secret(self, ctx: ProvisioningContext) -> None:
        self._create_optional(self.secrets, self.settings.artifacts.tls_key_secret,
                              ctx.answers.get('TLS_KEY_PATH') if uses_https(ctx.answers) else None)

    # Configs

    def create_proxy_config(self, ctx: ProvisioningContext) -> None:
        self._create(self.configs, self.settings.artifacts.proxy_config, source=str(self.settings.proxy_path))

    def create_custom_ca_config(self, ctx: ProvisioningContext) -> None:
        self._create_optional(self.configs, self.settings.artifacts.custom_ca_config,
                              ctx.answers.get('CUSTOM_CA_PATH') if uses_custom_ca(ctx.answers) else None)

    def _create(self, store: ArtifactStore, name: str, source: str) -> None:
        store.create(name, source=source)
        self.runner.display(f"✓ Created {name}")

    def _create_optional(self, store: ArtifactStore, name: str, source: Optional[str]) -> None:
        if source:
            self._create(store, name, source)
        else:
            store.create(name, content='')
            self.runner.display(f"✓ Created empty placeholder {name}")

    # Credentials and launch

    def generate_credentials(self, ctx: ProvisioningContext) -> None:
        ctx.derived = self.derive()
        self.runner.display(f"✓ Generated {len(ctx.derived)} service credentials")

    def launch_stack(self, ctx: ProvisioningContext) -> None:
        self.runner.display("Starting dot.base...")
        ctx.launch_output = self.launcher.launch(
            str(self.settings.parameters_path), str(self.settings.stack_path)
        )
        self.runner.display("✓ dot.base started")

    def build_stages(self) -> List[Stage]:
        """Return the ordered pipeline stages for these collaborators."""
        artifacts = self.settings.artifacts
        failure_message = EXISTING_INSTALLATION_MESSAGE.format(support_contact=self.settings.support_contact)

        def creating(store: ArtifactStore, name: str, action) -> List[ProvisioningStep]:
            steps = []
            if self.settings.recreate_artifacts:
                steps.append(ProvisioningStep(
                    f'remove_{name}', lambda ctx: store.remove(name), StepKind.BEST_EFFORT
                ))
            steps.append(ProvisioningStep(f'create_{name}', action))
            return steps

        return [
            Stage(
                PipelineState.TEMPLATES_RENDERED,
                [
                    ProvisioningStep('prepare_output_dir', self.prepare_output_dir),
                    ProvisioningStep('render_realm', self.render_realm),
                ],
                failure_message,
            ),
            Stage(
                PipelineState.SECRETS_CREATED,
                creating(self.secrets, artifacts.realm_secret, self.create_realm_secret)
                + creating(self.secrets, artifacts.tls_cert_secret, self.create_tls_cert_secret)
                + creating(self.secrets, artifacts.tls_key_secret, self.create_tls_key_secret),
                failure_message,
            ),
            Stage(
                PipelineState.CONFIGS_CREATED,
                [ProvisioningStep('render_proxy_config', self.render_proxy_config)]
                + creating(self.configs, artifacts.proxy_config, self.create_proxy_config)
                + creating(self.configs, artifacts.custom_ca_config, self.create_custom_ca_config),
                failure_message,
            ),
            Stage(
                PipelineState.DERIVED_SECRETS_GENERATED,
                [ProvisioningStep('generate_credentials', self.generate_credentials)],
            ),
            Stage(
                PipelineState.PARAMETERS_RENDERED,
                [
                    ProvisioningStep('render_parameters', self.render_parameters),
                    ProvisioningStep('render_stack', self.render_stack),
                ],
            ),
            Stage(
                PipelineState.LAUNCHED,
                [ProvisioningStep('launch_stack', self.launch_stack)],
            ),
        ]
