import json
import os
from pathlib import Path

import click

from solcbind.cli.painting import paint_compilation_output
from solcbind.compile.config import default_settings
from solcbind.compile.encode import encode_input
from solcbind.compile.types import CompilationInput, OptimizerSettings, SourceText
from solcbind.exceptions import SolcError
from solcbind.ffi import CompilerAdapter, load_module
from solcbind.solc import load, parse_output, run_compiler

option_compiler = click.option(
    '--compiler',
    help="Path to a solc executable or libsolc shared library",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True)


def source_unit_name(path: Path) -> str:
    """Sources are named by their path relative to the working directory, so imports between them resolve."""
    try:
        return Path(os.path.relpath(path.resolve())).as_posix()
    except ValueError:  # different drive on windows
        return path.resolve().as_posix()


@click.command('info')
@option_compiler
@click.option('--license', 'show_license', help="Also print the compiler license", is_flag=True, default=False)
def info(compiler, show_license):
    """Show the version (and license) of a solidity compiler."""
    try:
        handle = CompilerAdapter(load_module(compiler))
        click.secho(f"solc {handle.version()}", bold=True)
        if show_license:
            click.echo(handle.license())
    except SolcError as e:
        raise click.ClickException(str(e))


@click.command('compile')
@click.argument('sources', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@option_compiler
@click.option('--solc-version', help="Compiler version to install at --compiler if it is missing", default=None)
@click.option('--evm-version', help="Target EVM version", type=click.STRING, default=None)
@click.option('--runs', help="Optimizer runs", type=click.IntRange(min=0), default=None)
@click.option('--no-optimize', help="Disable the optimizer", is_flag=True, default=False)
@click.option('--remap', 'remappings', help="Import remapping (prefix=path)", multiple=True, default=[])
@click.option('--json', 'as_json', help="Print the compiler output document", is_flag=True, default=False)
@click.option('--show-input', help="Print the compiler input document and exit", is_flag=True, default=False)
def compile_sources(sources, compiler, solc_version, evm_version, runs, no_optimize, remappings, as_json, show_input):
    """Compile solidity source files."""
    settings = default_settings()
    if no_optimize:
        settings = settings._replace(optimizer=None)
    elif runs is not None:
        settings = settings._replace(optimizer=OptimizerSettings(enabled=True, runs=runs))
    if evm_version:
        settings = settings._replace(evm_version=evm_version)
    if remappings:
        settings = settings._replace(remappings=tuple(remappings))

    compilation_input = CompilationInput(
        sources={source_unit_name(path): SourceText(content=path.read_text()) for path in sources},
        settings=settings
    )
    if show_input:
        click.echo(json.dumps(encode_input(compilation_input), indent=2))
        return

    try:
        handle = load(compiler, version=solc_version)
        output_json = run_compiler(handle, compilation_input)
        output = parse_output(output_json)
    except SolcError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(json.loads(output_json), indent=2))
    else:
        paint_compilation_output(output)

    if output.has_errors:
        raise click.exceptions.Exit(1)
