"""Thin CLI wrapper for rso_packager.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from rso_packager import __version__
from rso_packager.config import Settings, get_settings, print_settings_json

app = typer.Typer(
    name="rso-packager",
    help="RSO Packager - build point-of-sale forms/firmware deployment packages",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"rso-packager version {__version__}")
        raise typer.Exit()


def show_usage() -> None:
    """Explain the expected input file and staging folders."""
    console.print()
    console.print(
        "You attempted to create a package without providing the proper input. "
        "This program takes a single json file argument. Furthermore, four folders "
        "must be present in the work directory. Those 4 folders must be named "
        '"install-forms", "rollback-forms", "install-firmware" and "rollback-firmware".',
        markup=False,
    )
    console.print()
    console.print(
        "If those folders did not exist prior to your running of this tool, they have "
        "been created for you. At minimum, you must put something in one of the install "
        "folders. Install forms go in the install-forms folder. Install firmware goes in "
        "the install-firmware folder. Same idea for rollback forms and firmware. If there "
        "are no rollback files for the package, leave the rollback folders empty.",
        markup=False,
    )
    console.print()
    console.print(
        "[red]Take heed of these requirements and please re-run the command[/red]"
    )
    console.print()


def _fatal(settings: Settings, message: str, problems: list[str] | None = None) -> None:
    """Show usage, write the sample input file and report a fatal error."""
    from rso_packager.inputs.io import write_sample_input

    show_usage()
    sample = write_sample_input(settings.work_dir, settings.sample_input_name)
    console.print(f"An example input file is available at {sample}", markup=False)
    err_console.print(f"[red]Fatal Error:[/red] {message}", highlight=False)
    for problem in problems or []:
        err_console.print(f"  - {problem}", markup=False, highlight=False)


@app.command()
def main(
    input_file: Annotated[
        Path | None,
        typer.Argument(help="Path to the package input .json file"),
    ] = None,
    work_dir: Annotated[
        Path | None,
        typer.Option(
            "--work-dir",
            "-w",
            help="Folder holding the staging folders (default: current directory)",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option("--show-config", help="Print effective configuration as JSON"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Create an RSO package from INPUT_FILE and the four staging folders."""
    from rso_packager.inputs.io import InputFileError
    from rso_packager.package.content import NoContentError
    from rso_packager.package.layout import LayoutError
    from rso_packager.package.service import PackageValidationError, create_package
    from rso_packager.runlog import RunLog

    settings = get_settings()
    if work_dir is not None:
        settings = settings.model_copy(update={"work_dir": work_dir})

    if show_config:
        typer.echo(print_settings_json(settings))
        return

    exit_code = 0
    log_dir = settings.work_dir / settings.log_dir_name
    with RunLog(log_dir, level=settings.log_level, enabled=settings.log_to_file):
        if input_file is None:
            # Still create the staging folders so the user knows where to put content
            from rso_packager.package.context import PackageContext
            from rso_packager.package.layout import ensure_input_folders

            ensure_input_folders(PackageContext(), settings.work_dir)
            _fatal(
                settings,
                "This program requires a json file passed as its only argument. "
                "Please try again.",
            )
            exit_code = 1
        else:
            try:
                result = create_package(input_file, settings)
            except PackageValidationError as e:
                _fatal(
                    settings,
                    "The input file or input folders were not in a valid state. "
                    "Please try again.",
                    e.problems,
                )
                exit_code = 1
            except InputFileError as e:
                _fatal(settings, str(e), e.problems)
                exit_code = 1
            except (LayoutError, NoContentError) as e:
                _fatal(settings, str(e))
                exit_code = 1
            else:
                console.print(
                    f"[green]✓ Package created: {result.package_name}[/green]"
                )
                console.print(f"  Root: {result.root_folder}", markup=False)
                console.print(f"  Content: {result.content.value}")
                console.print(f"  Rollback: {'yes' if result.has_rollback else 'no'}")
                if result.manifest_ok:
                    console.print(f"  Manifest: {result.manifest_path}", markup=False)
                else:
                    console.print(
                        "[yellow]Warning, the manifest file for this package was not "
                        "able to be generated. All other package items were created "
                        "successfully.[/yellow]"
                    )

    if exit_code:
        raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
