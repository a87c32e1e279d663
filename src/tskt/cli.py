import logging
import sys
from pathlib import Path

import click

from tskt.declarations import DeclarationTranslator
from tskt.logger import logger
from tskt.printer import render_file
from tskt.settings import load_settings


def _setup_logging(debug: bool) -> None:
    # Ensure stdlib logger emits records so structlog output is visible
    level = logging.DEBUG if debug else logging.WARNING
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        # structlog renders the final message; keep stdlib formatter simple.
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "source",
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the translated declarations as JSON instead of Kotlin.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging of skipped and unresolved nodes.",
)
def main(source: Path, as_json: bool, debug: bool) -> None:
    """
    Translate the declarations of a TypeScript file into Kotlin signatures.
    """
    _setup_logging(debug)

    settings = load_settings()
    translator = DeclarationTranslator(settings)
    translated = translator.translate_file(source)

    if as_json:
        click.echo(translated.model_dump_json(indent=2))
    else:
        click.echo(render_file(translated))

    for err in translated.errors:
        click.echo(f"{source}:{err.line}: {err.name or err.node_type}: {err.error}", err=True)

    logger.debug(
        "Translation finished",
        path=str(source),
        declarations=len(translated.declarations),
        errors=len(translated.errors),
    )
    raise SystemExit(1 if translated.errors else 0)


if __name__ == "__main__":
    main()
