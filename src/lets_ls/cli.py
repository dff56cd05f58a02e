import logging
from pathlib import Path
from typing import Optional

import typer

from lets_symbols import SymbolExtractor
from lets_tree_sitter import ASTWalker, ConfigError, GrammarLoadError, LetsParser, LetsPatterns

from .config import load_config
from .logging_setup import configure_logging
from .positions import to_byte_position

logger = logging.getLogger(__name__)

app = typer.Typer(help="lets-ls - Language server for lets.yaml task runner configs")


def _read(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {file_path}: {e}", err=True)
        raise typer.Exit(code=1)


def _parser() -> LetsParser:
    try:
        return LetsParser()
    except GrammarLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def serve(
    config_file: Path = typer.Option(Path("pyproject.toml"), "--config", help="TOML file with a [tool.lets-ls] table"),
    log_path: Optional[str] = typer.Option(None, help="Write logs to this file instead of stderr"),
    log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, ...)"),
):
    """Run the language server over stdio"""
    from .server import create_server

    try:
        config = load_config(config_file).merged_with({"log_path": log_path, "log_level": log_level})
        configure_logging(config.log_level, config.log_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        server = create_server(config)
    except GrammarLoadError as e:
        logger.error("%s", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info("starting lets-ls on stdio")
    server.start_io()


@app.command()
def commands(file_path: Path = typer.Argument(..., help="lets.yaml file")):
    """List command names in declaration order"""
    extractor = SymbolExtractor(_parser())
    for command in extractor.get_commands(_read(file_path)):
        typer.echo(command.name)


@app.command()
def context(
    file_path: Path = typer.Argument(..., help="lets.yaml file"),
    line: int = typer.Argument(..., help="Zero-based line"),
    character: int = typer.Argument(..., help="Zero-based character (UTF-16 units, as editors count)"),
):
    """Show what the cursor at LINE:CHARACTER is inside"""
    text = _read(file_path)
    parser = _parser()
    patterns = LetsPatterns(parser)
    extractor = SymbolExtractor(parser, patterns.query_helper)

    pos = to_byte_position(text, line, character)
    current = extractor.get_current_command(text, pos)
    filename = extractor.extract_filename(text, pos)

    typer.echo(f"position: {patterns.get_position_type(text, pos).value}")
    typer.echo(f"command: {current.name if current else '-'}")
    typer.echo(f"mixin: {filename if filename is not None else '-'}")


@app.command()
def dump(file_path: Path = typer.Argument(..., help="YAML file")):
    """Print the tree-sitter syntax tree"""
    result = _parser().parse_string(_read(file_path))
    for text_line in ASTWalker.dump(result.tree.root_node, result.source):
        typer.echo(text_line)
    for error in result.errors:
        typer.echo(f"error: {error}")


if __name__ == "__main__":
    app()
