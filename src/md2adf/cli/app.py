"""
md2adf CLI - Convert markdown to ADF and post it to Jira.

Usage:
    # Print the ADF JSON for a markdown file (or stdin)
    md2adf convert notes.md
    echo "**done**" | md2adf convert

    # Dry-run a comment on the issue named in the current branch
    md2adf comment notes.md

    # Actually post it
    md2adf comment notes.md --issue PROJ-123 --execute

    # Replace the description, post branch commits, move the issue
    md2adf describe design.md --issue PROJ-123 --execute
    md2adf commits --base develop --execute
    md2adf transition "In Review" --execute

    # Create, assign, look up
    md2adf create story.md --project PROJ --summary "Export to CSV" --execute
    md2adf assign-me --issue PROJ-123 --execute
    md2adf search --mine --open
    md2adf show --issue PROJ-123
    md2adf detect --check

Configuration:
    ~/.config/md2adf/config.json or ~/.md2adf.json with several instances,
    or JIRA_URL, JIRA_EMAIL and JIRA_API_TOKEN in the environment / .env.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.formatters.adf import markdown_to_adf
from ..adapters.git import get_commits_on_branch, get_issue_key_from_branch
from ..adapters.jira import JiraAdapter
from ..application.commands import (
    AddCommentCommand,
    AddCommitsCommentCommand,
    AssignToMeCommand,
    Command,
    CommandResult,
    CreateIssueCommand,
    GetIssueCommand,
    SearchIssuesCommand,
    TransitionStatusCommand,
    UpdateDescriptionCommand,
)
from ..core.exceptions import ConfigError, ConversionError, IssueTrackerError
from ..core.ports import AppConfig, IssueData
from .exit_codes import ExitCode
from .output import Console


# Subcommands that act on one existing issue
ISSUE_KEY_COMMANDS = ("comment", "describe", "commits", "transition", "assign-me", "show")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--cwd",
        type=str,
        help="Working directory used to pick the Jira instance and git branch"
    )
    common.add_argument(
        "--config",
        type=Path,
        help="Path to a JSON config file"
    )
    common.add_argument(
        "--execute",
        action="store_true",
        help="Actually send changes to Jira (default is dry-run)"
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (also MD2ADF_VERBOSE=true)"
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    parser = argparse.ArgumentParser(
        prog="md2adf",
        description="Convert markdown to Atlassian Document Format and post it to Jira",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add(name: str, help_text: str) -> argparse.ArgumentParser:
        return subparsers.add_parser(name, parents=[common], help=help_text)

    def add_issue_option(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--issue", "-i", type=str, help="Issue key (default: from branch)")

    convert = add("convert", "Print the ADF JSON for markdown")
    convert.add_argument("file", nargs="?", help="Markdown file (default: stdin)")
    convert.add_argument("--indent", type=int, default=2, help="JSON indentation")

    comment = add("comment", "Add markdown as a comment")
    comment.add_argument("file", nargs="?", help="Markdown file (default: stdin)")
    add_issue_option(comment)

    describe = add("describe", "Replace the issue description")
    describe.add_argument("file", nargs="?", help="Markdown file (default: stdin)")
    add_issue_option(describe)

    commits = add("commits", "Comment with the commits on this branch")
    add_issue_option(commits)
    commits.add_argument("--base", type=str, help="Base branch (default: from config)")

    transition = add("transition", "Move the issue to another status")
    transition.add_argument("status", help="Target status / transition name")
    add_issue_option(transition)

    assign = add("assign-me", "Assign the issue to yourself")
    add_issue_option(assign)

    show = add("show", "Show an issue")
    add_issue_option(show)

    create = add("create", "Create an issue with a markdown description")
    create.add_argument("file", nargs="?", help="Markdown description file ('-' for stdin)")
    create.add_argument("--project", "-p", required=True, help="Project key")
    create.add_argument("--summary", "-s", required=True, help="Issue summary")
    create.add_argument("--type", "-t", dest="issue_type", default="Task", help="Issue type")
    create.add_argument("--priority", help="Priority name")
    create.add_argument("--assign-me", action="store_true", help="Assign the new issue to yourself")

    search = add("search", "Search issues with JQL or filters")
    search.add_argument("--jql", help="Raw JQL (overrides the filters)")
    search.add_argument("--project", "-p", help="Project key")
    search.add_argument("--status", help="Status name")
    search.add_argument("--assignee", help="Assignee account id")
    search.add_argument("--mine", action="store_true", help="Only issues assigned to you")
    search.add_argument("--open", action="store_true", help="Hide resolved/closed issues")
    search.add_argument("--max", type=int, default=20, dest="max_results", help="Maximum results")

    detect = add("detect", "Show the Jira instance used for the working directory")
    detect.add_argument("--check", action="store_true", help="Also test the connection")

    add("instances", "List configured Jira instances")

    return parser


def read_markdown(path: Optional[str]) -> str:
    """Read markdown from a file, or stdin when no path (or '-') is given."""
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def exit_code_for(result: CommandResult) -> ExitCode:
    if result.success:
        return ExitCode.SUCCESS
    if isinstance(result.cause, ConversionError):
        return ExitCode.CONVERSION_ERROR
    if isinstance(result.cause, IssueTrackerError):
        return ExitCode.TRACKER_ERROR
    return ExitCode.ERROR


# -------------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------------

def run_convert(args: argparse.Namespace, console: Console) -> ExitCode:
    markdown = read_markdown(args.file)
    document = markdown_to_adf(markdown)
    console.print(json.dumps(document, indent=args.indent or None, ensure_ascii=False))
    return ExitCode.SUCCESS


def run_instances(provider: EnvironmentConfigProvider, console: Console) -> ExitCode:
    instances = provider.list_instances()
    if not instances:
        console.warning("No Jira instances configured")
        return ExitCode.CONFIG_ERROR

    console.table(
        ["Name", "URL", "Path patterns"],
        [[i["name"], i["url"], ", ".join(i["patterns"])] for i in instances],
    )
    return ExitCode.SUCCESS


def run_detect(
    args: argparse.Namespace,
    provider: EnvironmentConfigProvider,
    console: Console,
) -> ExitCode:
    cwd = args.cwd or os.getcwd()
    resolved = provider.resolve_instance(cwd)

    console.table(
        ["Setting", "Value"],
        [
            ["cwd", cwd],
            ["instance", resolved.instance.name],
            ["url", resolved.instance.tracker.url],
            ["base branch", resolved.base_branch],
        ],
    )

    if args.check:
        tracker = JiraAdapter(resolved.instance.tracker)
        if not tracker.test_connection():
            console.error(f"Could not connect to {resolved.instance.tracker.url}")
            return ExitCode.TRACKER_ERROR
        me = tracker.get_current_user()
        console.success(f"Connected as {me.get('displayName', me.get('accountId', '?'))}")

    return ExitCode.SUCCESS


def build_command(
    args: argparse.Namespace,
    tracker: JiraAdapter,
    issue_key: Optional[str],
    base_branch: str,
    cwd: str,
    dry_run: bool,
) -> Command:
    """Create the application command for a tracker subcommand."""
    if args.command == "comment":
        return AddCommentCommand(tracker, issue_key, read_markdown(args.file), dry_run=dry_run)
    if args.command == "describe":
        return UpdateDescriptionCommand(tracker, issue_key, read_markdown(args.file), dry_run=dry_run)
    if args.command == "commits":
        commits = get_commits_on_branch(args.base or base_branch, cwd=cwd)
        return AddCommitsCommentCommand(tracker, issue_key, commits, dry_run=dry_run)
    if args.command == "transition":
        return TransitionStatusCommand(tracker, issue_key, args.status, dry_run=dry_run)
    if args.command == "assign-me":
        return AssignToMeCommand(tracker, issue_key, dry_run=dry_run)
    if args.command == "show":
        return GetIssueCommand(tracker, issue_key)
    if args.command == "create":
        return CreateIssueCommand(
            tracker,
            project_key=args.project,
            summary=args.summary,
            issue_type=args.issue_type,
            description=read_markdown(args.file) if args.file else "",
            priority=args.priority,
            assign_to_me=args.assign_me,
            dry_run=dry_run,
        )
    return SearchIssuesCommand(
        tracker,
        jql=args.jql,
        project=args.project,
        status=args.status,
        assignee="currentUser" if args.mine else args.assignee,
        max_results=args.max_results,
        include_resolved=not args.open,
    )


def show_result_data(console: Console, data: Any, verbose: bool) -> None:
    """Print whatever a successful command returned."""
    if isinstance(data, IssueData):
        console.issue_detail(data)
    elif isinstance(data, list):
        if data:
            console.issue_table(data)
        else:
            console.info("No issues found")
    elif isinstance(data, dict) and "content" in data:
        console.document_summary(data)
        if verbose:
            console.print(json.dumps(data, indent=2, ensure_ascii=False))
    elif isinstance(data, dict) and data.get("key"):
        console.info(f"{data['key']} {data['url']}")
    elif isinstance(data, dict) and data.get("accountId"):
        console.info(f"Assigned to {data.get('displayName', data['accountId'])}")


def run_tracker_command(
    args: argparse.Namespace,
    provider: EnvironmentConfigProvider,
    config: AppConfig,
    console: Console,
) -> ExitCode:
    """Run one of the commands that talk to Jira."""
    logger = logging.getLogger("main")
    cwd = args.cwd or os.getcwd()

    resolved = provider.resolve_instance(cwd)
    logger.debug(f"Using instance '{resolved.instance.name}' ({resolved.instance.tracker.url})")

    issue_key = None
    if args.command in ISSUE_KEY_COMMANDS:
        issue_key = args.issue or get_issue_key_from_branch(cwd)
        if not issue_key:
            console.error(
                "Could not determine issue key. Pass --issue or use a branch named with an issue key."
            )
            return ExitCode.ERROR

    tracker = JiraAdapter(resolved.instance.tracker, dry_run=config.dry_run)
    command = build_command(args, tracker, issue_key, resolved.base_branch, cwd, config.dry_run)

    if command.dry_run:
        console.dry_run_banner()

    result = command.execute()
    label = f"{command.name} on {issue_key}" if issue_key else command.name
    console.command_result(label, result)

    if result.success and result.data:
        show_result_data(console, result.data, config.verbose)

    return exit_code_for(result)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = logging.getLogger("main")

    try:
        # Unset flags stay None so environment and config values still apply
        provider = EnvironmentConfigProvider(
            config_file=args.config,
            cli_overrides={
                "execute": args.execute or None,
                "verbose": args.verbose or None,
                "base": getattr(args, "base", None),
            },
        )
        config = provider.load()

        setup_logging(config.verbose)
        console = Console(color=not args.no_color)

        if args.command == "convert":
            return run_convert(args, console)
        if args.command == "instances":
            return run_instances(provider, console)
        if args.command == "detect":
            return run_detect(args, provider, console)

        return run_tracker_command(args, provider, config, console)

    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        return ExitCode.FILE_NOT_FOUND
    except IsADirectoryError as e:
        logger.error(f"Not a file: {e.filename}")
        return ExitCode.FILE_NOT_FOUND
    except UnicodeDecodeError as e:
        logger.error(f"Input is not valid UTF-8: {e}")
        return ExitCode.ERROR
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return ExitCode.ERROR
    except ConversionError as e:
        logger.error(str(e))
        return ExitCode.CONVERSION_ERROR
    except ConfigError as e:
        logger.error(str(e))
        return ExitCode.CONFIG_ERROR
    except IssueTrackerError as e:
        logger.error(str(e))
        return ExitCode.TRACKER_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
