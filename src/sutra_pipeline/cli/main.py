"""Main Typer application with 4 subcommands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="sutra-pipeline",
    help="Sanskrit tokenization and dhātu-lopa blocking analysis.",
    no_args_is_help=True,
)

LOG_LEVEL_HELP = "Logging level (DEBUG, INFO, WARNING, ERROR)"


@app.command()
def tokenize(
    text: str = typer.Argument(..., help="IAST or Devanagari text"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Detect the script of TEXT and split it into phoneme tokens."""
    from .tokenize_cmd import run_tokenize

    run_tokenize(text, log_level)


@app.command()
def classify(
    root: str = typer.Argument(..., help="Verbal root (dhātu)"),
    affix: str = typer.Argument(..., help="Affix (pratyaya)"),
    mode: str = typer.Option(None, "--mode", "-m", help="Classifier mode: lookup or rules"),
    config: str = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    log_level: str = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Classify whether ROOT + AFFIX triggers dhātu-lopa."""
    from .classify_cmd import run_classify

    run_classify(root, affix, mode, config, log_level)


@app.command()
def analyze(
    root: str = typer.Argument(..., help="Verbal root (dhātu)"),
    affix: str = typer.Argument(..., help="Affix (pratyaya)"),
    operation: str = typer.Option("guna", "--operation", "-o", help="guna or vrddhi"),
    mode: str = typer.Option(None, "--mode", "-m", help="Classifier mode: lookup or rules"),
    config: str = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    log_level: str = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Run the complete rule preset on ROOT and print the resulting state."""
    from .analyze_cmd import run_analyze

    run_analyze(root, affix, operation, mode, config, log_level)


@app.command()
def batch(
    requests_path: str = typer.Argument(..., help="JSONL file of {root, affix, operation}"),
    mode: str = typer.Option(None, "--mode", "-m", help="Classifier mode: lookup or rules"),
    config: str = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    log_level: str = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
) -> None:
    """Analyze a batch of blocking requests and print results with a summary."""
    from .analyze_cmd import run_batch

    run_batch(requests_path, mode, config, log_level)


if __name__ == "__main__":
    app()
