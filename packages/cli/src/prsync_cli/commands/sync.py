"""sync command: fetch a PR's review conversation and write it to disk."""

from __future__ import annotations

import json

import click
from rich.console import Console

from prsync_cli.detect import detect_current_pr_url, detect_repo
from prsync_core.errors import InvalidPRReferenceError, PRSyncError
from prsync_core.gh.client import GitHubClient
from prsync_core.gh.pull_request import fetch_all
from prsync_core.stats import compute_stats, format_summary
from prsync_core.transformer import to_jsonl, transform
from prsync_core.utils.pr_ref import PRRef, parse_pr_reference, parse_pr_url
from prsync_store.directory import DirectoryStore
from prsync_store.models import SyncRecord

console = Console(stderr=True)


def _resolve_pr_ref(pr: str | None, default_repo: str | None) -> PRRef:
    """Work out which PR to sync from the argument, config and working directory."""
    if pr is None:
        url = detect_current_pr_url()
        if not url:
            raise InvalidPRReferenceError("No PR given and no pull request found for the current branch.")
        return parse_pr_url(url)

    if pr.strip().isdigit() and not default_repo:
        default_repo = detect_repo()
    return parse_pr_reference(pr, default_repo=default_repo)


@click.command("sync")
@click.argument("pr", required=False)
@click.option(
    "-o",
    "--output",
    "output_dir",
    default=None,
    help="Output directory. Overrides config file (default: /tmp/github.com).",
)
@click.option("-R", "--repo", default=None, help="Repository in OWNER/REPO format (auto-detected from cwd).")
@click.option("-j", "--json", "as_json", is_flag=True, help="Print a JSON summary instead of the output path.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress messages.")
@click.pass_context
def sync_cmd(ctx, pr: str | None, output_dir: str | None, repo: str | None, as_json: bool, quiet: bool):
    """Sync review threads, reviews and comments of a pull request.

    PR may be a number, OWNER/REPO#NUMBER, or a pull request URL. When
    omitted, the pull request of the current branch is used.

    \b
    Output:
      <output>/<owner>/<repo>/pr/<number>/pr-meta.json
      <output>/<owner>/<repo>/pr/<number>/reviews.jsonl
    """
    config = ctx.obj["config"] if ctx.obj else {}
    quiet = quiet or bool(config.get("quiet"))

    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    def log(message: str) -> None:
        if not quiet:
            console.print(message, markup=False, highlight=False)

    try:
        pr_ref = _resolve_pr_ref(pr, repo or config.get("repo"))
        log(f"Syncing PR #{pr_ref.number} from {pr_ref.slug}...")

        client = GitHubClient(token)
        data = fetch_all(client, pr_ref.owner, pr_ref.repo, pr_ref.number, progress=log)

        entities = transform(data)
        stats = compute_stats(data, entities)
    except PRSyncError as e:
        raise click.ClickException(str(e)) from e

    store = DirectoryStore(output_dir or config.get("output_dir") or "/tmp/github.com")
    ctx.call_on_close(store.close)
    record = SyncRecord(
        owner=pr_ref.owner,
        repo=pr_ref.repo,
        pr_number=pr_ref.number,
        meta=data.meta.to_dict() if data.meta else {},
        entries_jsonl=to_jsonl(entities),
    )
    try:
        out_dir = store.save(record)
    except OSError as e:
        raise click.ClickException(f"Could not write sync output: {e}") from e

    log(f"Wrote {out_dir} ({len(entities)} entries)")
    log("")
    log(format_summary(stats))
    log("")

    if as_json:
        summary = {
            "outputDir": out_dir,
            "prNumber": pr_ref.number,
            "owner": pr_ref.owner,
            "repo": pr_ref.repo,
            **stats.to_summary(),
        }
        click.echo(json.dumps(summary))
    else:
        click.echo(out_dir)
