import logging
import os
import pathlib
import sys
from typing import Any

import yaml

import click
from tmpltranslate import comments, parser

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "templates": {
        "patterns": list(parser.DEFAULT_PATTERNS),
        "language": "en",
    },
}


def load_config(config_folder: str) -> dict[str, Any]:
    config_folder_path = os.path.abspath(config_folder)
    config_file_path = os.path.abspath(f"{config_folder_path}/config.yml")

    config: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.error(f"File not found: {config_file_path}, using defaults.")
    except yaml.YAMLError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    merged = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in config.items():
        if isinstance(values, dict):
            merged.setdefault(section, {}).update(values)
    return merged


def setup_logging(config: dict[str, Any]) -> None:
    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("extract")
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option("--template-folder", required=True, help="Template folder to scan.")
@click.option("--output", default=None, help="Catalog file to write, stdout if omitted.")
@click.option("--language", default=None, help="Language tag of the catalog.")
def extract(config_folder: str, template_folder: str, output: str | None, language: str | None) -> None:
    config = load_config(config_folder)
    setup_logging(config)

    parser.run(
        template_folder_path=os.path.abspath(template_folder),
        output_path=output,
        language=language or config["templates"]["language"],
        patterns=tuple(config["templates"]["patterns"]),
    )


@cli.command("prune")
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option("--output", default=None, help="File to write, stdout if omitted.")
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
def prune(config_folder: str, output: str | None, template: str) -> None:
    setup_logging(load_config(config_folder))

    clean = comments.prune_all_comments(pathlib.Path(template).read_text("utf-8"))
    if output:
        pathlib.Path(output).write_text(clean, "utf-8")
        logger.info(f"Wrote {output}")
    else:
        click.echo(clean, nl=False)
