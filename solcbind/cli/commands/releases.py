from pathlib import Path

import click

from solcbind.config.constants import default_compiler_path
from solcbind.exceptions import SolcError
from solcbind.releases import download_release, fetch_releases, resolve, resolve_version

option_releases_url = click.option(
    '--releases-url',
    help="Release index URL; defaults to the index for this platform",
    type=click.STRING,
    default=None)


@click.command()
@option_releases_url
@click.option('--all', 'show_all', help="List every published version", is_flag=True, default=False)
def releases(releases_url, show_all):
    """List published solidity compiler releases."""
    try:
        index = fetch_releases(url=releases_url)
    except SolcError as e:
        raise click.ClickException(str(e))

    click.secho(f"Latest release: {index.latest_release}", bold=True)
    if show_all:
        for version, filename in index.releases.items():
            click.echo(f"{version:<12} {filename}")


@click.command()
@click.argument('version', required=False, default=None)
@click.option('--path', help="Destination filepath", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option('--binaries-url', help="Base URL of the compiler artifacts", type=click.STRING, default=None)
@option_releases_url
def download(version, path, binaries_url, releases_url):
    """Download a solidity compiler release (defaults to the latest)."""
    try:
        index = fetch_releases(url=releases_url)
        resolved_version = resolve_version(index, version)
        filename = resolve(index, resolved_version)
        destination = download_release(filename,
                                       path or default_compiler_path(resolved_version),
                                       base_url=binaries_url,
                                       index=index)
    except SolcError as e:
        raise click.ClickException(str(e))
    click.secho(f"Successfully installed solc {resolved_version} at {destination}", fg='green')
