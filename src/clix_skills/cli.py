# CLI interface for clix_skills
import argparse
import logging
import sys
from pathlib import Path

from clix_skills import __version__
from clix_skills.clients import CLIENT_LABELS, SUPPORTED_CLIENTS, client_label, resolve_client
from clix_skills.errors import ClixSkillsError, SkillInstallError, SkillNotFoundError
from clix_skills.host import HostEnvironment
from clix_skills.models import SyncOutcome, SyncStatus
from clix_skills.skills import available_skills, install_skill, skill_destination
from clix_skills.sync import MANUAL_CLIENT, SyncOrchestrator, sync_clients
from clix_skills.utils import get_backup_dir

# ABOUTME: Exit codes
# 0 = success, 1 = partial success (an MCP client failed), 2 = config/usage error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

STATUS_SYMBOLS: dict[SyncStatus, str] = {
    SyncStatus.INJECTED: "✔",
    SyncStatus.ALREADY_CONFIGURED: "✔",
    SyncStatus.SKIPPED: "-",
    SyncStatus.UNSUPPORTED: "!",
    SyncStatus.FAILED: "✗",
}


def prompt_confirm(prompt: str) -> bool:
    """Ask a yes/no question on stdin, defaulting to yes.

    ABOUTME: End of input counts as "no" so piped runs never write unasked
    """
    try:
        answer = input(f"{prompt} [Y/n]: ").strip().lower()
    except EOFError:
        print()
        return False
    return answer in ("", "y", "yes")


def auto_confirm(prompt: str) -> bool:
    """Confirmation used by --yes: echo the question and accept it."""
    print(f"{prompt} [Y/n]: y")
    return True


def prompt_client() -> str:
    """Interactive client picker.

    ABOUTME: Accepts a menu number or a client id
    ABOUTME: Returns "manual" on end of input
    """
    choices = [*SUPPORTED_CLIENTS, MANUAL_CLIENT]
    print("Which AI client are you using?")
    for index, client_id in enumerate(choices, start=1):
        label = CLIENT_LABELS.get(client_id, "None / Manual")
        print(f"  {index}) {label}")

    while True:
        try:
            answer = input(f"Select [1-{len(choices)}]: ").strip().lower()
        except EOFError:
            print()
            return MANUAL_CLIENT

        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        if answer in choices:
            return answer
        print("  Invalid choice. Enter a number from the list.")


def _orchestrator_options(args: argparse.Namespace, host: HostEnvironment) -> dict[str, object]:
    return {
        "host": host,
        "report": print,
        "backup_dir": None if args.no_backup else get_backup_dir(host),
    }


def _print_outcome(outcome: SyncOutcome) -> None:
    symbol = STATUS_SYMBOLS[outcome.status]
    print(f"  {symbol} {client_label(outcome.client_id)}: {outcome.status.value.replace('_', ' ')}")


def cmd_configure(args: argparse.Namespace) -> int:
    """Execute configure command.

    ABOUTME: Registers the Clix MCP server with each requested client
    ABOUTME: Prompts for a client when none is given
    """
    host = HostEnvironment.current()
    clients = args.clients or [prompt_client()]
    confirm = auto_confirm if args.yes else prompt_confirm

    report = sync_clients(clients, confirm, **_orchestrator_options(args, host))

    print()
    print("MCP configuration:")
    for outcome in report.outcomes:
        _print_outcome(outcome)

    return EXIT_PARTIAL if report.has_failures else EXIT_SUCCESS


def cmd_install(args: argparse.Namespace) -> int:
    """Execute install command.

    ABOUTME: Copies skill bundle(s) into the project, then configures MCP
    ABOUTME: MCP problems other than FAILED never fail the install
    """
    host = HostEnvironment.current()
    skills_root = Path(args.skills_dir) if args.skills_dir else host.cwd / "skills"

    if args.all:
        names = available_skills(skills_root)
        if not names:
            print(f"Error: No skills found in {skills_root}")
            return EXIT_CONFIG_ERROR
    elif args.skill:
        names = [args.skill]
    else:
        print("Error: Please specify a skill name or use --all flag")
        return EXIT_CONFIG_ERROR

    relative_dest = skill_destination(args.client, args.path)
    installed: list[tuple[str, Path]] = []
    for name in names:
        print(f"Installing skill: {name}")
        try:
            destination = install_skill(name, skills_root, host.cwd, args.client, args.path)
        except SkillNotFoundError as e:
            print(f"Error: {e}")
            return EXIT_CONFIG_ERROR
        except SkillInstallError as e:
            print(f"Error: {e}")
            return EXIT_FATAL
        print(f"  Skill files installed to {relative_dest}/{name}")
        installed.append((name, destination))

    print()
    client = args.client or prompt_client()
    confirm = auto_confirm if args.yes else prompt_confirm
    try:
        outcome = SyncOrchestrator(confirm, **_orchestrator_options(args, host)).run(client)
    except Exception as e:
        # The skills are already on disk; MCP setup is best effort
        logging.getLogger(__name__).exception("MCP configuration failed")
        print(f"MCP Configuration warning: {e}")
        outcome = SyncOutcome(client, SyncStatus.FAILED, str(e))

    for name, destination in installed:
        print()
        print(f"✔ Skill {name} is ready to use!")
        print(f"  - Docs: {destination / 'SKILL.md'}")
        print("  - Instruct your agent to read these docs to start working.")

    return EXIT_PARTIAL if outcome.is_fatal else EXIT_SUCCESS


def cmd_clients(args: argparse.Namespace) -> int:
    """Execute clients command.

    ABOUTME: Lists supported clients and where their MCP config lives on this host
    """
    host = HostEnvironment.current()
    print(f"clix-skills clients v{__version__}")
    print()

    for client_id in SUPPORTED_CLIENTS:
        label = CLIENT_LABELS[client_id]
        try:
            descriptor = resolve_client(client_id, host)
        except ClixSkillsError as e:
            print(f"  {client_id:<10} {label:<16} {e}")
            continue
        marker = "" if descriptor.config_path.exists() else " (not created)"
        print(
            f"  {client_id:<10} {label:<16} "
            f"{host.display_path(descriptor.config_path)} [{descriptor.format.value}]{marker}"
        )

    return EXIT_SUCCESS


def _add_mcp_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Answer yes to every confirmation"
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Don't back up existing config files before changing them"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clix-skills",
        description="Install Clix agent skills and register the Clix MCP server with AI clients"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"clix-skills v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # install command
    install_parser = subparsers.add_parser(
        "install",
        help="Install agent skill(s) and configure MCP"
    )
    install_parser.add_argument(
        "skill",
        nargs="?",
        help="Name of the skill to install"
    )
    install_parser.add_argument(
        "--client", "-c",
        help=f"Target AI client ({', '.join([*SUPPORTED_CLIENTS, MANUAL_CLIENT])})"
    )
    install_parser.add_argument(
        "--path", "-p",
        help="Custom installation path (default: .clix/skills)"
    )
    install_parser.add_argument(
        "--all", "-a",
        action="store_true",
        help="Install all available skills"
    )
    install_parser.add_argument(
        "--skills-dir",
        help="Directory containing skill bundles (default: ./skills)"
    )
    _add_mcp_options(install_parser)

    # configure command
    configure_parser = subparsers.add_parser(
        "configure",
        help="Register the Clix MCP server with one or more clients"
    )
    configure_parser.add_argument(
        "clients",
        nargs="*",
        help="Client ids to configure (prompted if omitted)"
    )
    _add_mcp_options(configure_parser)

    # clients command
    subparsers.add_parser(
        "clients",
        help="List supported clients and their config paths"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "install":
            return cmd_install(args)
        elif args.command == "configure":
            return cmd_configure(args)
        elif args.command == "clients":
            return cmd_clients(args)
        else:
            # No command specified, show help
            parser.print_help()
            return EXIT_SUCCESS
    except KeyboardInterrupt:
        print()
        return EXIT_FATAL
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
