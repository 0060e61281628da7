import json
from dataclasses import replace

import click

from nextcloud_webdav_client.client import WebDAVClient
from nextcloud_webdav_client.config import get_settings
from nextcloud_webdav_client.models import WebDAVItem, WebDAVResponse
from nextcloud_webdav_client.observability import setup_logging


def _client(ctx: click.Context) -> WebDAVClient:
    return ctx.obj["client"]


def _check(response: WebDAVResponse) -> WebDAVResponse:
    """Exit with status 1 and print the message if the operation failed."""
    if not response.success:
        click.echo(f"Error: {response.message}", err=True)
        raise SystemExit(1)
    return response


def _echo_items(items: tuple[WebDAVItem, ...], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([item.to_dict() for item in items], indent=2))
        return
    for item in items:
        kind = "DIR " if item.is_directory else "FILE"
        size = "" if item.is_directory else f" ({item.formatted_size})"
        click.echo(f"{kind} {item.path}{size}")


@click.group()
@click.option(
    "--url",
    envvar="WEBDAV_URL",
    help="WebDAV root URL (can also use WEBDAV_URL env var)",
)
@click.option(
    "--username",
    "-u",
    envvar="WEBDAV_USERNAME",
    help="Username for BasicAuth (can also use WEBDAV_USERNAME env var)",
)
@click.option(
    "--password",
    "-p",
    envvar="WEBDAV_PASSWORD",
    help="Password or app password for BasicAuth (can also use WEBDAV_PASSWORD env var)",
)
@click.option(
    "--log-level",
    "-l",
    envvar="LOG_LEVEL",
    default="warning",
    show_default=True,
    type=click.Choice(
        ["critical", "error", "warning", "info", "debug"], case_sensitive=False
    ),
    help="Logging level",
)
@click.option(
    "--log-format",
    envvar="LOG_FORMAT",
    default="text",
    show_default=True,
    type=click.Choice(["text", "json"], case_sensitive=False),
    help="Log output format",
)
@click.option("--json", "as_json", is_flag=True, help="Print listings as JSON")
@click.pass_context
def cli(
    ctx: click.Context,
    url: str | None,
    username: str | None,
    password: str | None,
    log_level: str,
    log_format: str,
    as_json: bool,
):
    """
    Work with files on a WebDAV server.

    \b
    Examples:
      $ export WEBDAV_URL=https://cloud.example.com/remote.php/dav/files/alice/
      $ export WEBDAV_USERNAME=alice
      $ export WEBDAV_PASSWORD=app-password
      $ nextcloud-webdav ls Documents
      $ nextcloud-webdav find Documents '*.md'
    """
    setup_logging(log_format=log_format, log_level=log_level)

    try:
        settings = replace(
            get_settings(),
            webdav_url=url,
            webdav_username=username,
            webdav_password=password,
            log_format=log_format,
            log_level=log_level.upper(),
        )
        settings.validate()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    ctx.ensure_object(dict)
    client = WebDAVClient.from_settings(settings, transport=ctx.obj.get("transport"))
    ctx.call_on_close(client.close)
    ctx.obj["client"] = client
    ctx.obj["json"] = as_json


@cli.command("ls")
@click.argument("path", default="")
@click.pass_context
def list_directory(ctx: click.Context, path: str):
    """List the contents of PATH."""
    response = _check(_client(ctx).list(path))
    _echo_items(response.items, ctx.obj["json"])


@cli.command("find")
@click.argument("directory")
@click.argument("pattern")
@click.pass_context
def find_files(ctx: click.Context, directory: str, pattern: str):
    """List files in DIRECTORY whose name matches the glob PATTERN."""
    response = _check(_client(ctx).search_files(directory, pattern))
    _echo_items(response.items, ctx.obj["json"])


@cli.command("info")
@click.argument("path")
@click.pass_context
def file_info(ctx: click.Context, path: str):
    """Show metadata for PATH."""
    item = _check(_client(ctx).get_file_info(path)).items[0]
    if ctx.obj["json"]:
        click.echo(json.dumps(item.to_dict(), indent=2))
        return
    click.echo(f"Name: {item.name}")
    click.echo(f"Type: {'directory' if item.is_directory else 'file'}")
    click.echo(f"Size: {item.formatted_size}")
    click.echo(f"Content type: {item.content_type or '-'}")
    click.echo(f"Last modified: {item.formatted_last_modified or '-'}")


@cli.command("get")
@click.argument("path")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write to this file instead of stdout",
)
@click.pass_context
def download(ctx: click.Context, path: str, output: str | None):
    """Download PATH."""
    response = _check(_client(ctx).download(path))
    if output:
        with open(output, "wb") as fh:
            fh.write(response.content or b"")
        click.echo(f"Saved {len(response.content or b'')} bytes to {output}")
    else:
        click.echo(response.content or b"", nl=False)


@cli.command("put")
@click.argument("local_path", type=click.Path(dir_okay=False))
@click.argument("remote_path")
@click.pass_context
def upload(ctx: click.Context, local_path: str, remote_path: str):
    """Upload LOCAL_PATH to REMOTE_PATH."""
    response = _check(_client(ctx).upload(remote_path, local_path))
    click.echo(response.message)


@cli.command("rm")
@click.argument("path")
@click.pass_context
def delete(ctx: click.Context, path: str):
    """Delete the file or directory at PATH."""
    response = _check(_client(ctx).delete(path))
    click.echo(response.message)


@cli.command("mkdir")
@click.argument("path")
@click.pass_context
def create_directory(ctx: click.Context, path: str):
    """Create a directory at PATH."""
    response = _check(_client(ctx).create_directory(path))
    click.echo(response.message)


@cli.command("exists")
@click.argument("path")
@click.pass_context
def exists(ctx: click.Context, path: str):
    """Exit with status 0 if PATH exists, 1 otherwise."""
    if _client(ctx).exists(path):
        click.echo(f"{path} exists")
    else:
        click.echo(f"{path} does not exist", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
