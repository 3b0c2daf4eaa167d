import click

import solcbind
from solcbind.compile.constants import SEVERITY_ERROR, SEVERITY_INFO, SEVERITY_WARNING
from solcbind.compile.types import CompilationOutput
from solcbind.config.constants import USER_LOG_DIR
from solcbind.utilities.logging import GlobalLoggerSettings

SEVERITY_COLORS = {SEVERITY_ERROR: 'red', SEVERITY_WARNING: 'yellow', SEVERITY_INFO: 'blue'}


def echo_version(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    click.secho(f"{solcbind.__title__} {solcbind.__version__}", bold=True)
    ctx.exit()


def echo_logging_root_path(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    click.secho(str(USER_LOG_DIR.absolute()))
    ctx.exit()


def enable_file_logging(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    GlobalLoggerSettings.start_text_file_logging()


def enable_json_file_logging(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    GlobalLoggerSettings.start_json_file_logging()


def enable_debug_logging(ctx, param, value):
    if not value or ctx.resilient_parsing:
        return
    GlobalLoggerSettings.set_log_level("debug")
    GlobalLoggerSettings.start_console_logging()


def paint_compilation_output(output: CompilationOutput) -> None:
    for error in output.errors or ():
        message = error.formatted_message or error.message
        click.secho(message.rstrip(), fg=SEVERITY_COLORS.get(error.severity))

    for filename, contracts in (output.contracts or dict()).items():
        for name, contract in contracts.items():
            bytecode_size = len(contract.evm.bytecode.object) // 2
            click.secho(f"{filename}:{name}", bold=True)
            click.echo(f"  ABI entries     {len(contract.abi)}")
            click.echo(f"  Bytecode size   {bytecode_size} bytes")
            if not contract.evm.bytecode.is_linked:
                libraries = ', '.join(library for references in contract.evm.bytecode.link_references.values()
                                      for library in references)
                click.echo(f"  Unlinked        {libraries}")
