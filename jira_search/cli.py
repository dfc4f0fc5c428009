from __future__ import annotations

import getpass
import json
import logging
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .auth import save_token, load_token
from .cloud import ServerInfoCloudDetector, StaticCloudDetector
from .config import DEPLOYMENTS, SiteProfile, save_profile, load_profile
from .errors import InvalidSearchMode, TransportError
from .jira_client import JiraClient
from .models import SearchMode
from .search import IssueSearch

app = typer.Typer(add_completion=False)
console = Console()


def normalize_base_url(url: str) -> str:
    url = url.strip()
    if url.endswith("/"):
        url = url[:-1]
    return url


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")):
    root = logging.getLogger()
    root.handlers = [RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def open_client(prof: SiteProfile, token: str) -> JiraClient:
    return JiraClient(base_url=prof.jira_base_url, email=prof.email, token=token)


def cloud_detector_for(prof: SiteProfile, client: JiraClient):
    if prof.deployment == "auto":
        return ServerInfoCloudDetector(client)
    return StaticCloudDetector(prof.deployment == "cloud")


def client_for_profile(profile: str) -> tuple[SiteProfile, JiraClient]:
    prof = load_profile(profile)
    token = load_token(profile, prof.jira_base_url)
    if not token:
        raise typer.BadParameter(
            f"No token found in keychain for profile '{profile}'. Run configure again."
        )
    return prof, open_client(prof, token)


def fail(e: TransportError) -> None:
    print("[red]Jira call failed.[/red]")
    if e.code is not None:
        print(f"Status: {e.code}")
    print(e.message)
    raise typer.Exit(code=1)


@app.command()
def configure(profile: str):
    """
    Create/update a site profile and store its Jira API token in the OS keychain.
    """
    jira_base_url = normalize_base_url(typer.prompt("Jira base URL (e.g. https://client.atlassian.net)"))
    email = typer.prompt("Jira e-mail (the account used with the API token)")
    search_mode = typer.prompt("Search mode (auto, enhanced, legacy)", default=SearchMode.AUTO.value)
    deployment = typer.prompt(f"Deployment ({', '.join(DEPLOYMENTS)})", default="auto")

    try:
        profile_obj = SiteProfile(
            name=profile,
            jira_base_url=jira_base_url,
            email=email,
            search_mode=search_mode,
            deployment=deployment,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    token = getpass.getpass("Jira API token (input hidden): ").strip()
    if not token:
        raise typer.BadParameter("Token cannot be empty.")

    save_profile(profile_obj)
    save_token(profile, jira_base_url, token)

    print(f"[green]Saved profile[/green] {profile} and stored token in keychain.")


@app.command()
def deployment(profile: str):
    """
    Show whether the site is treated as Jira Cloud.
    """
    prof, client = client_for_profile(profile)
    try:
        is_cloud = cloud_detector_for(prof, client).is_cloud_deployment()
    except TransportError as e:
        fail(e)
    source = "serverInfo" if prof.deployment == "auto" else "profile"
    print(f"{'Cloud' if is_cloud else 'Self-managed'} ({source})")


@app.command()
def search(
    profile: str,
    jql: str,
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Field to return, repeatable."),
    expand: Optional[List[str]] = typer.Option(None, "--expand", "-e", help="Expansion, repeatable."),
    max_results: Optional[int] = typer.Option(None, min=1, help="Page size (defaults to the profile's)."),
    start_at: int = typer.Option(0, min=0, help="Offset, legacy endpoint only."),
    mode: Optional[str] = typer.Option(None, help="Override the profile's search mode."),
    as_json: bool = typer.Option(False, "--json", help="One JSON object per issue."),
):
    """
    Run a JQL search and print one page of issues.
    """
    prof, client = client_for_profile(profile)
    try:
        searcher = IssueSearch.for_client(client, cloud_detector_for(prof, client), mode or prof.search_mode)
    except InvalidSearchMode as e:
        raise typer.BadParameter(str(e))

    fields = field or prof.default_fields
    expands = list(expand or [])
    if "names" not in expands:
        expands.append("names")

    try:
        issues = searcher.search(
            jql,
            fields=fields,
            expand=expands,
            max_results=prof.page_size if max_results is None else max_results,
            start_at=start_at,
        )
    except TransportError as e:
        fail(e)

    if as_json:
        for issue in issues:
            typer.echo(json.dumps({
                "id": issue.id,
                "key": issue.key,
                "self": issue.self_url,
                "fields": dict(issue.fields),
                "names": dict(issue.names),
            }))
        return

    table = Table(title=f"{len(issues)} issue(s)")
    table.add_column("Key")
    for f in fields:
        table.add_column(issues[0].display_name(f) if issues else f)
    for issue in issues:
        table.add_row(issue.key, *(render_value(issue.value(f)) for f in fields))
    console.print(table)


def render_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        for k in ("displayName", "name", "value", "key"):
            if k in value:
                return str(value[k])
        return json.dumps(value)
    if isinstance(value, list):
        return ", ".join(render_value(v) for v in value)
    return str(value)


if __name__ == "__main__":
    app()
