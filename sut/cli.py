"""CLI entry point for selective unit testing.

    sut check -c selection.txt [-c more.txt] [--modules modules.yaml]
    sut modules modules.yaml
"""

import json
import sys
from typing import Optional

import click

from . import __version__
from .reporting.manifest import load_module_manifest
from .runner.decider import execution_mode
from .selection.parser import config_paths_from_env, load_selection
from .selection.schema import ConfigError
from .selection.validator import validate_selection


@click.group()
@click.version_option(__version__, prog_name="sut")
def main():
    """Selective unit testing - run a chosen subset of unit test blocks."""


@main.command()
@click.option(
    "-c", "--config", "configs", multiple=True,
    help="Selection file (repeatable). Defaults to $SUT_CONFIG.",
)
@click.option("--modules", "manifest", default=None, help="YAML list of known modules.")
@click.option("--pretty", is_flag=True, help="Pretty print output.")
def check(configs: tuple[str, ...], manifest: Optional[str], pretty: bool):
    """Load selection files and show what a run would select."""
    paths = list(configs) or config_paths_from_env()

    try:
        spec = load_selection(paths)
        known_modules = load_module_manifest(manifest) if manifest else []
    except (ConfigError, ValueError) as e:
        output_error(str(e), command="check")
        sys.exit(1)

    validation = validate_selection(spec)
    mode = execution_mode(spec)

    data = {
        "mode": mode.value,
        "configs": paths,
        "selections": spec.to_dict(),
        "warnings": [
            {"path": w.path, "message": w.message} for w in validation.warnings
        ],
    }
    if manifest:
        data["modules_known"] = len(known_modules)
        data["modules_excluded"] = sorted(spec.excluded_modules)

    output(
        {
            "success": True,
            "command": "check",
            "data": data,
            "message": f"Mode: {mode.value} ({validation})",
        },
        pretty=pretty,
    )


@main.command()
@click.argument("manifest")
def modules(manifest: str):
    """List the modules declared in a YAML manifest."""
    try:
        names = load_module_manifest(manifest)
    except (ConfigError, ValueError) as e:
        output_error(str(e), command="modules")
        sys.exit(1)

    output({
        "success": True,
        "command": "modules",
        "data": {"modules": names},
        "message": f"{len(names)} module(s)",
    })


def output(payload: dict, pretty: bool = False) -> None:
    """Print a flow JSON payload."""
    indent = 2 if pretty else None
    click.echo(json.dumps(payload, indent=indent, ensure_ascii=False))


def output_error(message: str, command: str = "test", **extra):
    """Output error in flow JSON format."""
    output({
        "success": False,
        "command": command,
        "data": extra or None,
        "message": message,
    })


if __name__ == "__main__":
    main()
