"""CLI for GitHub image hosting."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .config import ConfigError, find_host, get_token, load_hosts, save_hosts, upsert_host
from .host import ImageHost
from .models import GitHubImageHostConfig, ImageHostRecord, ImageHostType
from .network import DEFAULT_TIMEOUT, NetworkAccess

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "imagehost.json"


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def open_host(ctx: click.Context) -> ImageHost:
    """Load the selected image host."""
    try:
        hosts = load_hosts(ctx.obj["config_path"])
        return find_host(hosts, ctx.obj["host_name"], ctx.obj["network"])
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


# ============ CLI Group ============

@click.group()
@click.option(
    "--config",
    "config_path",
    envvar="IMAGEHOST_CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG,
    show_default=True,
    help="Hosts file",
)
@click.option("--host", "host_name", default=None, help="Image host name (default: first)")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True, help="Request timeout (s)")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, host_name: str | None, timeout: float, verbose: int) -> None:
    """Store images in a GitHub repository."""
    load_dotenv()
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["host_name"] = host_name
    ctx.obj.setdefault("network", NetworkAccess(timeout=timeout))


# ============ Config Commands ============

@cli.command()
@click.argument("name")
@click.option("--user", "user_name", required=True, help="Repository owner")
@click.option("--repo", "repository_name", required=True, help="Repository name")
@click.option("--token", default=None, help="Personal access token (default: GH_TOKEN/GITHUB_TOKEN)")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    user_name: str,
    repository_name: str,
    token: str | None,
    use_gh_cli: bool,
) -> None:
    """Add or replace a GitHub image host."""
    config_path: Path = ctx.obj["config_path"]
    resolved_token = get_token(token, use_gh_cli=use_gh_cli)
    if not resolved_token:
        raise click.ClickException("No personal access token given")

    config = GitHubImageHostConfig(
        personal_access_token=resolved_token,
        user_name=user_name,
        repository_name=repository_name,
    )
    record = ImageHostRecord(type=ImageHostType.GITHUB, name=name, config=config.model_dump())
    try:
        hosts = upsert_host(load_hosts(config_path), record)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    save_hosts(config_path, hosts)
    click.echo(f"Saved image host {name} ({user_name}/{repository_name})")


@cli.command(name="list")
@click.pass_context
def list_hosts(ctx: click.Context) -> None:
    """List configured image hosts."""
    try:
        hosts = load_hosts(ctx.obj["config_path"])
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if not hosts:
        click.echo("No image hosts configured")
        return
    for record in hosts:
        host = find_host([record], network=ctx.obj["network"])
        state = "ready" if host.ready() else "incomplete"
        click.echo(f"{record.name}\t{record.type.value}\t{state}")


# ============ Host Commands ============

@cli.command()
@click.pass_context
def test(ctx: click.Context) -> None:
    """Check the image host configuration against the service."""
    host = open_host(ctx)
    ok, msg = host.test_config(host.get_config())
    if not ok:
        raise click.ClickException(f"Configuration test failed: {msg}")
    click.echo(f"Image host {host.name} OK")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--path", "dest_path", default=None, help="Path in repository (default: file name)")
@click.pass_context
def upload(ctx: click.Context, file: Path, dest_path: str | None) -> None:
    """Upload FILE and print its download URL."""
    host = open_host(ctx)
    url, msg = host.create(file.read_bytes(), dest_path or file.name)
    if not url:
        raise click.ClickException(msg)
    click.echo(url)


@cli.command()
@click.argument("url")
@click.pass_context
def delete(ctx: click.Context, url: str) -> None:
    """Delete the image behind URL."""
    host = open_host(ctx)
    if not host.owns_url(url):
        raise click.ClickException(f"URL does not belong to image host {host.name}")
    ok, msg = host.remove(url)
    if not ok:
        raise click.ClickException(msg)
    click.echo(f"Deleted {url}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
