# src/venv_reconciler/core/reconcile/reconciler.py
"""
Reconciler — orquestração de uma passada de reconciliação.

Este módulo combina os componentes do core em uma única operação
`reconcile()`, invocada uma vez por ciclo de convergência pelo chamador.

Fluxo de uma passada:
    1. ExpectedState (arquivo declarado ausente → ConfigurationError,
       sem leitura nem escrita de estado)
    2. ambiente inexistente → BootstrapError
    3. ActualState (ausente/corrompido → {})
    4. detect_drift
    5. IN_SYNC → retorno imediato, zero instalações, nenhuma escrita
    6. caso contrário → ChangeLogger, Installer (todas as unidades),
       fingerprint novo, persistência de ExpectedState ∪ {environment_fingerprint}

Decisões arquiteturais:
    - O CommandRunner é injetado na construção; nenhum executável é
      resolvido por lookup global
    - Falhas fatais são exceções tipadas (ConfigurationError, InstallError,
      BootstrapError); falhas consultivas voltam em `ReconcileResult.warnings`
    - Uma InstallError deixa o registro de estado no valor anterior

Limites explícitos:
    - Não serializa passadas concorrentes no mesmo ambiente
    - Não faz retry automático
    - Não retoma instalação por unidade após falha parcial
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..backend.base import PackageManagerBackend
from ..backend.pip import PipBackend
from ..backend.runner import CommandRunner
from ..config.declaration import VenvDeclaration
from ..config.hashing import compute_declaration_hash
from ..context import ReconcileContext
from ..environment.bootstrap import VenvBootstrapper
from ..environment.fingerprint import EnvironmentFingerprintProvider
from ..environment.layout import VenvLayout
from ..errors import ErrorPayload
from ..exceptions import BootstrapError
from ..state.expected import ENVIRONMENT_FINGERPRINT_KEY, build_expected_state
from ..state.store import StateStore
from .changelog import ChangeLogger
from .drift import DriftReason, DriftReport, SyncState, detect_drift
from .installer import Installer


STEP_ID = "drift.detect"


@dataclass(frozen=True)
class ReconcileResult:
    """
    Resultado imutável de uma passada de reconciliação.

    Campos:
        - env_path: ambiente alvo
        - pass_id: identificador da passada (mesmo dos eventos)
        - started_at: timestamp UTC de início da passada
        - state: classificação do ambiente no início da passada
        - reason: motivo do drift, quando houver
        - installed_units: unidades instaladas, em ordem (vazio quando IN_SYNC)
        - environment_fingerprint: fingerprint persistido ao final (None se indisponível/no-op)
        - declaration_hash: hash canônico da declaração usada
        - warnings: sinais consultivos absorvidos na passada
        - events: log estruturado completo da passada
    """

    env_path: str
    pass_id: str
    started_at: str
    state: SyncState
    reason: Optional[DriftReason] = None
    installed_units: Tuple[str, ...] = ()
    environment_fingerprint: Optional[str] = None
    declaration_hash: str = ""
    warnings: Tuple[ErrorPayload, ...] = ()
    events: List[Dict[str, Any]] = field(default_factory=list, compare=False, repr=False)

    @property
    def installed(self) -> bool:
        return bool(self.installed_units)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "env_path": self.env_path,
            "pass_id": self.pass_id,
            "started_at": self.started_at,
            "state": self.state.value,
            "reason": self.reason.value if self.reason else None,
            "installed_units": list(self.installed_units),
            "environment_fingerprint": self.environment_fingerprint,
            "declaration_hash": self.declaration_hash,
            "warnings": [w.to_dict() for w in self.warnings],
        }


class Reconciler:
    """Reconciliador de um único ambiente virtual."""

    def __init__(
        self,
        declaration: VenvDeclaration,
        *,
        runner: CommandRunner,
        backend: Optional[PackageManagerBackend] = None,
    ):
        self.declaration = declaration
        self.layout = VenvLayout(declaration.path)
        self.runner = runner
        self.backend: PackageManagerBackend = backend or PipBackend(layout=self.layout, runner=runner)

        self.store = StateStore(path=self.layout.state_file)
        self.fingerprints = EnvironmentFingerprintProvider(layout=self.layout, backend=self.backend)
        self.installer = Installer(backend=self.backend, layout=self.layout)
        self.change_logger = ChangeLogger()
        self.bootstrapper = VenvBootstrapper(layout=self.layout, runner=runner, backend=self.backend)

    @property
    def env_path(self) -> str:
        return str(self.layout.path)

    def new_context(self) -> ReconcileContext:
        return ReconcileContext(env_path=self.env_path)

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------
    def exists(self) -> bool:
        return self.layout.exists()

    def destroy(self, *, ctx: Optional[ReconcileContext] = None) -> None:
        self.bootstrapper.destroy(ctx=ctx or self.new_context())

    def ensure_present(self) -> ReconcileResult:
        """Cria o ambiente se necessário e executa uma passada de reconciliação."""
        ctx = self.new_context()
        if not self.layout.exists(ctx=ctx):
            self.bootstrapper.create(self.declaration, ctx=ctx)
        return self.reconcile(ctx=ctx)

    # ------------------------------------------------------------------
    # Read-only check
    # ------------------------------------------------------------------
    def inspect(self, *, ctx: Optional[ReconcileContext] = None) -> DriftReport:
        """
        Classifica o ambiente sem instalar nem escrever estado.

        Raises:
            ConfigurationError: Se algum arquivo declarado não existir.
        """
        ctx = ctx or self.new_context()
        expected = build_expected_state(self.declaration, ctx=ctx)
        actual = self.store.load(ctx=ctx)
        report = detect_drift(
            expected,
            actual,
            current_fingerprint=lambda: self.fingerprints.current_fingerprint(ctx=ctx),
        )
        ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Classificação: {report.label}", state=report.label)
        return report

    def in_sync(self) -> bool:
        """
        True quando não há nada a reconciliar.

        Ambiente inexistente ou declaração sem requirements contam como
        sincronizados: não há passada de instalação a executar.
        """
        if not self.exists() or not self.declaration.has_requirements:
            return True
        return not self.inspect().needs_install

    # ------------------------------------------------------------------
    # Reconciliation pass
    # ------------------------------------------------------------------
    def reconcile(self, *, ctx: Optional[ReconcileContext] = None) -> ReconcileResult:
        """
        Executa uma passada completa de reconciliação.

        Raises:
            ConfigurationError: Arquivo de requirements declarado inexistente.
            BootstrapError: Ambiente inexistente ou estruturalmente inválido.
            InstallError: Falha na instalação de uma unidade.
        """
        ctx = ctx or self.new_context()
        declaration_hash = compute_declaration_hash(self.declaration)

        if not self.declaration.has_requirements:
            ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Ambiente {self.env_path}: nenhum requirement declarado")
            return self._result(ctx, state=SyncState.IN_SYNC, declaration_hash=declaration_hash)

        expected = build_expected_state(self.declaration, ctx=ctx)

        if not self.layout.exists(ctx=ctx):
            raise BootstrapError(
                message=f"Ambiente virtual não existe ou é inválido: {self.env_path}",
                details={"path": self.env_path, "reason": "missing_environment"},
                hint="Crie o ambiente (ensure_present) antes de reconciliar.",
            )

        actual = self.store.load(ctx=ctx)
        report = detect_drift(
            expected,
            actual,
            current_fingerprint=lambda: self.fingerprints.current_fingerprint(ctx=ctx),
        )
        ctx.log(step_id=STEP_ID, level="DEBUG", message=f"Classificação: {report.label}", state=report.label)

        if not report.needs_install:
            ctx.log(
                step_id=STEP_ID,
                level="INFO",
                message=f"Ambiente {self.env_path}: nenhuma mudança detectada - requirements sincronizados",
            )
            return self._result(ctx, state=report.state, declaration_hash=declaration_hash)

        self.change_logger.log_changes(expected, actual, report, ctx=ctx)

        units = self.installer.install_all(self.declaration, ctx=ctx)

        new_state = dict(expected)
        fingerprint = self.fingerprints.current_fingerprint(ctx=ctx)
        if fingerprint is not None:
            new_state[ENVIRONMENT_FINGERPRINT_KEY] = fingerprint
        self.store.save(new_state, ctx=ctx)

        ctx.log(
            step_id="state.save",
            level="INFO",
            message=f"Ambiente {self.env_path}: requirements sincronizados com sucesso",
        )

        return self._result(
            ctx,
            state=report.state,
            reason=report.reason,
            installed_units=tuple(u.path for u in units),
            environment_fingerprint=fingerprint,
            declaration_hash=declaration_hash,
        )

    def _result(self, ctx: ReconcileContext, *, state: SyncState, **kwargs: Any) -> ReconcileResult:
        return ReconcileResult(
            env_path=self.env_path,
            pass_id=ctx.pass_id,
            started_at=ctx.started_at,
            state=state,
            warnings=tuple(ctx.warnings),
            events=list(ctx.events),
            **kwargs,
        )
