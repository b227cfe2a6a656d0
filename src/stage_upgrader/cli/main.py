"""Command-line interface for stage-upgrader."""

import sys
from pathlib import Path

import click

from stage_upgrader.__version__ import __version__


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Stage Upgrader - inspect declarative stage upgrade definitions.

    Definitions are YAML files, one per stage type, each declaring the
    single-version steps that bring a stage's configuration forward.
    """
    pass


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
def status(directory: Path) -> None:
    """Show the upgrade chains defined in DIRECTORY.

    Lists every stage type with a definition, the version range its steps
    cover, and a description of each step.
    """
    from stage_upgrader.loader import load_definitions

    definitions = load_definitions(directory)
    if not definitions:
        click.echo("No upgrade definitions found.")
        return

    click.echo(f"Found {len(definitions)} upgrade definition(s):")
    click.echo("")

    for definition in definitions:
        click.echo(f"{definition.library}:{definition.stage}")
        if not definition.steps:
            click.echo("  No steps defined")
            click.echo("")
            continue

        first = definition.steps[0].from_version
        last = definition.steps[-1].to_version
        click.echo(f"  Versions: v{first} -> v{last}")
        for step in definition.steps:
            description = f": {step.description}" if step.description else ""
            click.echo(
                f"  - v{step.from_version} -> v{step.to_version} "
                f"({len(step.operations)} operation(s)){description}"
            )
        click.echo("")


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
def validate(directory: Path) -> None:
    """Check the upgrade definitions in DIRECTORY.

    Verifies:
    1. Every definition file parses and validates
    2. Each stage type is defined only once
    3. Steps form a contiguous chain with no missing versions
    """
    from stage_upgrader.loader import DEFINITION_SUFFIXES, DefinitionError, load_definition

    problems = 0
    seen: dict[tuple[str, str], Path] = {}

    for path in sorted(directory.iterdir()):
        if path.suffix not in DEFINITION_SUFFIXES or not path.is_file():
            continue

        try:
            definition = load_definition(path)
        except DefinitionError as e:
            click.echo(f"❌ {e}")
            problems += 1
            continue

        name = f"{definition.library}:{definition.stage}"
        if definition.key in seen:
            click.echo(f"❌ {path.name}: {name} already defined in {seen[definition.key].name}")
            problems += 1
            continue
        seen[definition.key] = path

        gaps = definition.gaps()
        if gaps:
            missing = ", ".join(f"v{v} -> v{v + 1}" for v in gaps)
            click.echo(f"❌ {path.name}: {name} is missing step(s) {missing}")
            problems += 1
            continue

        click.echo(f"✓ {path.name}: {name}")

    click.echo("")
    if problems:
        click.echo(f"❌ {problems} problem(s) found.")
        sys.exit(1)

    click.echo(f"✓ {len(seen)} definition(s) valid.")


if __name__ == "__main__":
    main()
