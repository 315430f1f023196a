"""resolve command: write an entry's status back to GitHub as a reaction."""

from __future__ import annotations

import click
from rich.console import Console

from prsync_cli.detect import detect_repo
from prsync_core.errors import PRSyncError
from prsync_core.gh.client import GitHubClient
from prsync_core.mutator import RESOLVABLE_STATUSES, resolve_entry
from prsync_core.utils.pr_ref import parse_repo_slug

console = Console(stderr=True)


@click.command("resolve")
@click.argument("entry_id")
@click.option(
    "-s",
    "--status",
    required=True,
    type=click.Choice(RESOLVABLE_STATUSES),
    help="Status to set.",
)
@click.option("-c", "--comment", default=None, help="Reply to the entry after setting the status.")
@click.option("-R", "--repo", default=None, help="Repository in OWNER/REPO format (auto-detected from cwd).")
@click.pass_context
def resolve_cmd(ctx, entry_id: str, status: str, comment: str | None, repo: str | None):
    """Mark ENTRY_ID as done, skip, or in_progress by adding a reaction.

    \b
    Reactions used:
      done         +1
      skip         -1
      in_progress  eyes

    Review threads are marked on their first comment. Reviews cannot be resolved.
    """
    config = ctx.obj["config"] if ctx.obj else {}

    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    slug = repo or config.get("repo") or detect_repo()
    if not slug:
        raise click.UsageError("--repo is required when no git repo detected")

    try:
        owner, repo_name = parse_repo_slug(slug)
        console.print(f"Resolving {entry_id} as {status}...", markup=False, highlight=False)
        result = resolve_entry(GitHubClient(token), owner, repo_name, entry_id, status, comment=comment)
    except PRSyncError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"Added reaction: {result.reaction}", markup=False, highlight=False)
    if result.replied:
        console.print("Comment added", markup=False, highlight=False)
    console.print("[green]Done[/green]")
