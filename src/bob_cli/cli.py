"""Interactive command-line interface for Bob CLI."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .config import ConfigModel, load_config
from .formatting import format_result, format_urgent
from .processor import CommandProcessor
from .storage import Storage


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
PROMPT = "> "


def show(console: Console, text: str, style: str = "white"):
    """Print one reply box. Task text is printed verbatim, not as markup."""
    console.print(Panel(Text(text), border_style=style, expand=False))


def build_processor(config: ConfigModel) -> CommandProcessor:
    storage = Storage(config.get_data_path())
    return CommandProcessor(storage, urgent_days=config.urgent_days)


def run_session(processor: CommandProcessor, console: Console, show_urgent: bool = True):
    """Read commands until 'bye' or end of input."""
    show(console, "Hello! I'm Bob\nWhat can I do for you?", "cyan")
    if processor.startup_error:
        show(console, processor.startup_error, "red")

    while True:
        try:
            line = console.input(PROMPT)
        except EOFError:
            line = "bye"

        result = processor.handle(line)
        if result.is_exit:
            show(console, format_result(result), "cyan")
            return

        if show_urgent:
            urgent = format_urgent(processor.urgent_tasks())
            if urgent:
                show(console, urgent, "yellow")

        show(console, format_result(result), "red" if result.is_error else "green")


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--data-file", "-f", type=click.Path(dir_okay=False),
              help="Task file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(config_path: Optional[Path], data_file: Optional[str], verbose: bool):
    """Bob - a chat-style personal task tracker."""
    config = load_config(config_path)
    if data_file:
        config.data_file = data_file

    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    console = Console()
    run_session(build_processor(config), console, show_urgent=config.show_urgent)


if __name__ == "__main__":
    main()
