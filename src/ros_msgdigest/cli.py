"""Command line entry point for ros-msgdigest using Cyclopts."""

import logging
import sys
from pathlib import Path
from typing import Annotated, NoReturn

from cyclopts import App, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ros_msgdigest.config import package_paths_from_env
from ros_msgdigest.exceptions import MsgSpecError
from ros_msgdigest.fingerprint import compute_md5_text
from ros_msgdigest.registry import MsgRegistry

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

app = App(
    name="ros-msgdigest",
    help="Compute ROS1 MD5 sums of message and service definitions.",
    help_format="rich",
)

PackagePathOption = Annotated[
    list[Path] | None,
    Parameter(name=["-p", "--package-path"]),
]
VerboseOption = Annotated[bool, Parameter(name=["-v", "--verbose"])]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _make_registry(package_path: list[Path] | None) -> MsgRegistry:
    paths = package_path if package_path is not None else package_paths_from_env()
    return MsgRegistry(paths)


def _fail(error: MsgSpecError) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", highlight=False)
    sys.exit(1)


@app.command(name="msg")
def msg(
    name: str,
    file: Path | None = None,
    *,
    package_path: PackagePathOption = None,
    show_text: bool = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the MD5 sum of a message definition.

    Parameters
    ----------
    name
        Full message name, e.g. std_msgs/String.
    file
        Read the definition from this file instead of the package path.
    package_path
        Package root directories to search. Defaults to ROS_PACKAGE_PATH.
    show_text
        Also print the text the MD5 sum is computed from.
    verbose
        Enable debug logging.
    """
    _configure_logging(verbose)
    try:
        registry = _make_registry(package_path)
        spec = registry.load_msg(name) if file is None else registry.load_msg_from_file(file, name)
        md5text = compute_md5_text(spec, registry.load_msg) if show_text else None
    except MsgSpecError as e:
        _fail(e)

    console.print(f"{spec.md5sum}  {spec.full_name}")
    if md5text is not None:
        console.print(md5text, markup=False)


@app.command(name="srv")
def srv(
    name: str,
    file: Path | None = None,
    *,
    package_path: PackagePathOption = None,
    show_text: bool = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the MD5 sums of a service and its request and response.

    Parameters
    ----------
    name
        Full service name, e.g. std_srvs/Trigger.
    file
        Read the definition from this file instead of the package path.
    package_path
        Package root directories to search. Defaults to ROS_PACKAGE_PATH.
    show_text
        Also print the request and response text the MD5 sum is computed from.
    verbose
        Enable debug logging.
    """
    _configure_logging(verbose)
    try:
        registry = _make_registry(package_path)
        spec = registry.load_srv(name) if file is None else registry.load_srv_from_file(file, name)
        texts = (
            [compute_md5_text(m, registry.load_msg) for m in (spec.request, spec.response)]
            if show_text
            else []
        )
    except MsgSpecError as e:
        _fail(e)

    console.print(f"{spec.md5sum}  {spec.full_name}")
    for part, md5text in zip((spec.request, spec.response), texts or [None, None], strict=True):
        console.print(f"{part.md5sum}  {part.full_name}")
        if md5text is not None:
            console.print(md5text, markup=False)


if __name__ == "__main__":
    app()
