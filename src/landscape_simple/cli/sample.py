"""Sampling commands for generating configuration landscapes."""

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from typer.models import ArgumentInfo, OptionInfo

from ..declarations import SpaceDeclaration, load_space
from ..errors import DomainError, ScaleTypeError
from ..frame import is_columnar, to_frame, to_records
from ..sampling.sobol import SobolSampler
from ..space import Configuration, HyperparameterSpace
from ..utils.text import default_output_path
from .config import read_pyproject, resolve_settings, validate_config

FORMATS = {"json": ".json", "csv": ".csv", "parquet": ".parquet"}


def _normalize_option_value(value):
    """Support calling the Typer command functions directly in tests."""
    return value.default if isinstance(value, (OptionInfo, ArgumentInfo)) else value


def _load_declaration(space_file: str) -> SpaceDeclaration:
    try:
        return load_space(space_file)
    except FileNotFoundError:
        typer.echo(f"Error: Space file not found: {space_file}", err=True)
        raise typer.Exit(1)
    except (DomainError, ScaleTypeError) as e:
        typer.echo(f"Error: Invalid space file {space_file}: {e}", err=True)
        raise typer.Exit(1)


def _load_project_config(project_root: Optional[str]) -> Dict[str, Any]:
    try:
        config = read_pyproject(Path(project_root) if project_root else None)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        typer.echo(f"Error: Malformed pyproject.toml: {e}", err=True)
        raise typer.Exit(1)

    errors = validate_config(config)
    if errors:
        typer.echo("Error: Invalid [tool.landscape] configuration:", err=True)
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)
    return config


def _check_settings(source: str, m: Optional[int], seed: Optional[int]) -> None:
    table = {k: v for k, v in (("m", m), ("seed", seed)) if v is not None}
    errors = validate_config(table)
    if errors:
        typer.echo(f"Error: Invalid settings in {source}:", err=True)
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)


def _format_param_line(entry: Dict[str, Any]) -> str:
    line = f"    • {entry['name']}: {entry['kind']} -> {entry['type']}"
    if "note" in entry:
        line += f" ({entry['note']})"
    return line


def _print_summary(
    space: HyperparameterSpace,
    configs: List[Configuration],
    sampling_desc: str,
    output_path: Path,
):
    typer.echo("\nLandscape Summary")
    typer.echo(f"  Sampling   : {sampling_desc}")
    typer.echo(f"  Size       : {len(configs):,} configurations × {len(space)} parameters")
    typer.echo(f"  Output     : {output_path}")
    typer.echo("  Parameter Space:")
    for entry in space.describe()["parameters"]:
        typer.echo(_format_param_line(entry))


def _write_output(
    output_path: Path,
    fmt: str,
    space: HyperparameterSpace,
    configs: List[Configuration],
    metadata: Dict[str, Any],
) -> None:
    if fmt == "json":
        document = {
            "space": space.describe(),
            "sampling": metadata,
            "configurations": to_records(configs),
        }
        with open(output_path, "w") as f:
            json.dump(document, f, indent=2)
        return

    frame = to_frame(configs, space)
    if not is_columnar(frame):
        typer.echo(
            f"Error: {fmt} output needs typed parameters; untyped columns can only be written as json",
            err=True,
        )
        raise typer.Exit(1)

    if fmt == "csv":
        frame.write_csv(output_path)
    else:
        frame.write_parquet(output_path)


def sample_command(
    space_file: str = typer.Argument(..., help="Space declaration (.toml or .json)"),
    m: Optional[int] = typer.Option(None, "-m", "--exponent", help="Generate 2^m configurations"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed of the scramble"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output filename (defaults to <space>-m<m>-s<seed>.<format>)",
    ),
    fmt: str = typer.Option("json", "--format", "-f", help="Output format: json, csv or parquet"),
    scramble: bool = typer.Option(True, "--scramble/--no-scramble", help="Use scrambled Sobol sequence"),
    project_root: Optional[str] = typer.Option(None, "--project-root", help="Directory with pyproject.toml (default: cwd)"),
):
    """Generate 2^m configurations of a declared space.

    Settings are taken from the command line, then the space file's
    [sampling] table, then [tool.landscape] in pyproject.toml.
    """
    space_file = _normalize_option_value(space_file)
    m = _normalize_option_value(m)
    seed = _normalize_option_value(seed)
    output = _normalize_option_value(output)
    fmt = _normalize_option_value(fmt)
    scramble = _normalize_option_value(scramble)
    project_root = _normalize_option_value(project_root)

    if fmt not in FORMATS:
        typer.echo(f"Error: Unknown format '{fmt}'. Choose from {', '.join(FORMATS)}", err=True)
        raise typer.Exit(1)

    declaration = _load_declaration(space_file)
    _check_settings("command line options", m, seed)
    _check_settings(f"[sampling] table of {space_file}", declaration.m, declaration.seed)
    project = _load_project_config(project_root)
    m, seed = resolve_settings(m, seed, declaration, project)

    sampler = SobolSampler(declaration.space, seed=seed, scramble=scramble)
    try:
        configs = sampler.sample(m)
    except (DomainError, ScaleTypeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Generated {len(configs)} Sobol configurations for {len(declaration.space)} parameters")

    output_path = Path(output) if output else default_output_path(Path(space_file), m, seed, FORMATS[fmt])
    if output is None:
        typer.echo(f"[info]Using default output path {output_path.name} (set --output to override)")

    metadata = {
        "method": sampler.method_name(),
        "m": m,
        "n": len(configs),
        "seed": seed,
        "scramble": scramble,
    }
    _write_output(output_path, fmt, declaration.space, configs, metadata)

    typer.echo(f"✓ Wrote {len(configs)} configurations")
    sampling_desc = f"Sobol (m={m}, scramble={'on' if scramble else 'off'}, seed={seed})"
    _print_summary(declaration.space, configs, sampling_desc, output_path)


def describe_command(
    space_file: str = typer.Argument(..., help="Space declaration (.toml or .json)"),
    as_json: bool = typer.Option(False, "--json", help="Print the description as JSON"),
):
    """Show the parameters of a space and their output types."""
    space_file = _normalize_option_value(space_file)
    as_json = _normalize_option_value(as_json)

    declaration = _load_declaration(space_file)
    description = declaration.space.describe()
    sampling = {k: v for k, v in (("m", declaration.m), ("seed", declaration.seed)) if v is not None}

    if as_json:
        typer.echo(json.dumps({**description, "sampling": sampling}, indent=2))
        return

    typer.echo(f"Space {space_file}: {len(declaration.space)} parameters")
    for entry in description["parameters"]:
        typer.echo(_format_param_line(entry))
    if sampling:
        typer.echo("  Sampling: " + ", ".join(f"{k}={v}" for k, v in sampling.items()))
