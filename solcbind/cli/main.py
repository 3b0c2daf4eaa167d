import click

from solcbind.cli.commands import compiler, releases
from solcbind.cli.painting import (
    echo_logging_root_path,
    echo_version,
    enable_debug_logging,
    enable_file_logging,
    enable_json_file_logging
)


@click.group()
@click.option('--version', help="Echo the CLI version",
              is_flag=True, callback=echo_version, expose_value=False, is_eager=True)
@click.option('--logging-path', help="Echo the logging root directory path",
              is_flag=True, callback=echo_logging_root_path, expose_value=False, is_eager=True)
@click.option('--file-logs', help="Log to a rotating text file under the logging root",
              is_flag=True, callback=enable_file_logging, expose_value=False)
@click.option('--json-logs', help="Log JSON events to a rotating file under the logging root",
              is_flag=True, callback=enable_json_file_logging, expose_value=False)
@click.option('--debug', help="Log debug output to the console",
              is_flag=True, callback=enable_debug_logging, expose_value=False, is_eager=True)
def solcbind_cli():
    """Top level command for the solidity compiler bindings."""


#
# CLI Entry Points
#

ENTRY_POINTS = (
    releases.releases,
    releases.download,
    compiler.info,
    compiler.compile_sources,
)

for entry_point in ENTRY_POINTS:
    solcbind_cli.add_command(entry_point)
