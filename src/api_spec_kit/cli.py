"""CLI entry point for api-spec-kit."""

import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from api_spec_kit.config import Settings
from api_spec_kit.generator.appendix import build_document, render_appendix
from api_spec_kit.generator.descriptor import build_descriptor
from api_spec_kit.generator.pipeline import generate_artifacts
from api_spec_kit.generator.validator import validate_files
from api_spec_kit.model.base import Project
from api_spec_kit.model.loader import load_project
from api_spec_kit.schema.normalizer import normalize, to_text
from api_spec_kit.sdk.targets import ALIASES, EMITTERS, get_emitter

TARGET_HELP = "SDK target: " + ", ".join(sorted({*EMITTERS, *ALIASES})) + " (case-insensitive)."


def _load(project_path: Path) -> Project:
    """Load a project file, turning validation failures into CLI errors."""
    try:
        return load_project(project_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid project {project_path}:\n{e}")
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(str(e))


def _write(output: Path, content: str) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """API Spec Kit: generate an OpenAPI descriptor, client SDKs and a spec appendix from a project."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings.from_env()


@main.command()
@click.argument("project_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the OpenAPI YAML.")
@click.pass_obj
def descriptor(settings: Settings, project_path: Path, output: Path):
    """Generate the OpenAPI descriptor of a project."""
    project = _load(project_path)
    _write(output, build_descriptor(project, settings))
    click.echo(f"Descriptor for {len(project.requests)} requests saved to {output}")


@main.command()
@click.argument("project_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the SDK source.")
@click.option("--target", default=None, help=TARGET_HELP)
@click.pass_obj
def sdk(settings: Settings, project_path: Path, output: Path, target: str | None):
    """Generate client SDK source for a project."""
    project = _load(project_path)
    emitter = get_emitter(target or settings.default_target, settings)
    _write(output, emitter.emit(project))
    click.echo(f"{emitter.target} SDK with {len(project.requests)} operations saved to {output}")


@main.command()
@click.argument("project_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the HTML appendix.")
@click.option("--ltr", is_flag=True, help="Left-to-right document direction.")
@click.option("--document", "full_document", is_flag=True, help="Wrap the appendix with the project's intro text.")
def appendix(project_path: Path, output: Path, ltr: bool, full_document: bool):
    """Generate the tabular API appendix."""
    project = _load(project_path)
    if full_document:
        content = build_document(project, title=project.name, rtl=not ltr)
    else:
        content = render_appendix(project)
    _write(output, content)
    click.echo(f"Appendix saved to {output}")


@main.command("normalize")
@click.argument("schema_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (defaults to stdout).")
@click.option("--to", "target_format", default="yaml", type=click.Choice(["yaml", "json"]), help="Output format.")
def normalize_cmd(schema_path: Path, output: Path | None, target_format: str):
    """Normalize a JSON/YAML schema file."""
    mapping, error = normalize(schema_path.read_text(encoding="utf-8"))
    if error is not None:
        raise click.ClickException(str(error))

    text = to_text(mapping, target_format)
    if output is None:
        click.echo(text, nl=False)
        return
    _write(output, text)
    click.echo(f"{len(mapping)} schemas saved to {output}")


@main.command()
@click.argument("project_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for all generated files.")
@click.option("--target", default=None, help=TARGET_HELP)
@click.option("--ltr", is_flag=True, help="Left-to-right document direction.")
@click.pass_obj
def run(settings: Settings, project_path: Path, output: Path, target: str | None, ltr: bool):
    """Full pipeline: descriptor + SDK + appendix document."""
    click.echo(f"Loading {project_path}...")
    project = _load(project_path)
    click.echo(f"Found {len(project.requests)} requests, {len(project.schemas)} schemas.")

    files = generate_artifacts(project, target, settings, rtl=not ltr)

    errors = validate_files(files)
    for fname, err in errors.items():
        click.echo(f"  Validation error in {fname}: {err}")

    output.mkdir(parents=True, exist_ok=True)
    for filename, content in files.items():
        file_path = output / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")

    if errors:
        raise click.ClickException(f"{len(errors)} generated files failed validation")
    click.echo(f"Done! Generated {len(files)} files in {output}")
