# Sync orchestration for clix_skills
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from clix_skills.clients import normalize_client_id, resolve_client
from clix_skills.errors import (
    ConfigParseError,
    ConfigReadError,
    ConfigShapeError,
    ConfigWriteError,
    PathResolutionError,
    UnsupportedClientError,
)
from clix_skills.host import HostEnvironment
from clix_skills.loader import load_document
from clix_skills.merger import empty_document, merge
from clix_skills.models import (
    CLIX_SERVER_ENTRY,
    ClientDescriptor,
    ConfirmFn,
    ReportFn,
    ServerEntry,
    SyncOutcome,
    SyncStatus,
)
from clix_skills.utils.backup import create_backup
from clix_skills.utils.fs import FileSystem, LocalFileSystem
from clix_skills.writer import write_document

logger = logging.getLogger(__name__)

# ABOUTME: Client id meaning "configure by hand", always skipped
MANUAL_CLIENT = "manual"


@dataclass
class SyncReport:
    """Report from syncing several clients.

    ABOUTME: One SyncOutcome per requested client, in request order
    ABOUTME: Failures are recorded, never raised, so every client gets its turn
    """

    outcomes: list[SyncOutcome] = field(default_factory=list)

    def add_outcome(self, outcome: SyncOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, status: SyncStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def has_failures(self) -> bool:
        return any(outcome.is_fatal for outcome in self.outcomes)


def _log_report(message: str) -> None:
    logger.info(message)


class SyncOrchestrator:
    """Register the Clix MCP server in one client's config file.

    ABOUTME: resolve -> load or template -> merge check -> confirm -> write -> outcome
    ABOUTME: Declining any confirmation leaves the filesystem untouched
    ABOUTME: Every expected error becomes a SyncOutcome; nothing escapes run()
    """

    def __init__(
        self,
        confirm: ConfirmFn,
        *,
        host: HostEnvironment | None = None,
        fs: FileSystem | None = None,
        entry: ServerEntry = CLIX_SERVER_ENTRY,
        report: ReportFn | None = None,
        backup_dir: Path | None = None,
    ) -> None:
        """Initialize orchestrator with its capabilities.

        Args:
            confirm: Asked before creating a file and before injecting
            host: Platform/home/cwd facts (defaults to the running process)
            fs: Filesystem capability (defaults to local disk)
            entry: Server to register
            report: Receives progress messages (defaults to logging)
            backup_dir: If set, existing configs are copied here before overwrite
        """
        self._confirm = confirm
        self._host = host or HostEnvironment.current()
        self._fs = fs or LocalFileSystem()
        self._entry = entry
        self._report = report or _log_report
        self._backup_dir = backup_dir

    def run(self, client_id: str) -> SyncOutcome:
        """Run the full workflow for one client and return its outcome."""
        client_key = normalize_client_id(client_id)

        if client_key == MANUAL_CLIENT:
            return self._finish(
                SyncOutcome(client_key, SyncStatus.SKIPPED, "Skipping automatic MCP configuration.")
            )

        try:
            descriptor = resolve_client(client_key, self._host, self._fs)
        except (UnsupportedClientError, PathResolutionError) as e:
            logger.debug(f"Cannot resolve {client_id}: {e}")
            return self._finish(
                SyncOutcome(
                    client_key,
                    SyncStatus.UNSUPPORTED,
                    f"Could not determine config path for {client_id}. Skipping.",
                )
            )

        return self._sync_descriptor(descriptor)

    def _sync_descriptor(self, descriptor: ClientDescriptor) -> SyncOutcome:
        path = descriptor.config_path
        nice_path = self._host.display_path(path)
        self._report(f"Checking MCP config at {nice_path}...")

        def outcome(status: SyncStatus, message: str) -> SyncOutcome:
            return self._finish(SyncOutcome(descriptor.client_id, status, message, path))

        try:
            document = load_document(path, descriptor.format, self._fs)
        except (ConfigParseError, ConfigReadError) as e:
            return outcome(SyncStatus.FAILED, f"Failed to parse existing config: {e}")

        existed = document is not None
        if document is None:
            if not self._confirm(f"Config file not found at {nice_path}. Create it?"):
                return outcome(
                    SyncStatus.SKIPPED,
                    "Skipping MCP configuration. You can configure manually later.",
                )
            # Kept in memory; the file is only written if the injection goes ahead
            document = empty_document(descriptor.schema_variant)

        try:
            result = merge(document, descriptor.schema_variant, self._entry)
        except ConfigShapeError as e:
            return outcome(SyncStatus.FAILED, f"Cannot update {nice_path}: {e}")

        if result.already_present:
            return outcome(SyncStatus.ALREADY_CONFIGURED, "Clix MCP Server is already configured.")

        if not self._confirm(f"Add Clix MCP Server to {nice_path}?"):
            return outcome(
                SyncStatus.SKIPPED,
                "Skipping MCP configuration. You can configure manually later.",
            )

        try:
            if existed:
                self._backup(descriptor)
            write_document(path, result.document, self._fs)
        except ConfigWriteError as e:
            return outcome(SyncStatus.FAILED, str(e))

        return outcome(
            SyncStatus.INJECTED,
            f"Added Clix MCP Server to configuration. Please restart {descriptor.client_id}.",
        )

    def _backup(self, descriptor: ClientDescriptor) -> None:
        if self._backup_dir is None:
            return
        try:
            create_backup(descriptor.config_path, self._backup_dir, descriptor.client_id)
        except OSError as e:
            raise ConfigWriteError(
                f"Could not back up {descriptor.config_path}, leaving it unchanged: {e}"
            ) from e

    def _finish(self, outcome: SyncOutcome) -> SyncOutcome:
        level = logging.WARNING if outcome.is_fatal else logging.DEBUG
        logger.log(level, f"{outcome.client_id}: {outcome.status.value} - {outcome.message}")
        self._report(outcome.message)
        return outcome


def sync_clients(
    client_ids: Iterable[str],
    confirm: ConfirmFn,
    **kwargs: object,
) -> SyncReport:
    """Run an independent orchestrator for each client.

    ABOUTME: Continues on client errors, records them in report
    ABOUTME: kwargs are passed to SyncOrchestrator (host, fs, report, backup_dir, entry)

    Args:
        client_ids: Clients to configure, in order
        confirm: Confirmation capability shared by all runs

    Returns:
        SyncReport with one outcome per client

    Examples:
        >>> host = HostEnvironment("linux", Path("/tmp/home"), Path("/tmp/work"))
        >>> report = sync_clients(["codex", "letta"], confirm=lambda _: True, host=host)
        >>> [o.status.value for o in report.outcomes]
        ['injected', 'unsupported']
    """
    report = SyncReport()

    for client_id in client_ids:
        orchestrator = SyncOrchestrator(confirm, **kwargs)  # type: ignore[arg-type]
        try:
            outcome = orchestrator.run(client_id)
        except Exception as e:
            # Record error but continue with other clients
            logger.exception(f"Unexpected error configuring {client_id}")
            outcome = SyncOutcome(normalize_client_id(client_id), SyncStatus.FAILED, str(e))
        report.add_outcome(outcome)

    return report
