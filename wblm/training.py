"""
Training Module with Rich Terminal UI

This module provides training, evaluation and query functionality with
progress bars and status displays using the Rich library.
"""

from typing import Dict

from rich.console import Console
from rich.progress import (
    Progress, SpinnerColumn, TextColumn, BarColumn,
    TaskProgressColumn, TimeElapsedColumn
)
from rich.panel import Panel
from rich.table import Table
from rich import box

from .config import LMConfig, InvalidNGramError
from .corpus import count_lines, read_lines, split_line
from .model import LangModel


console = Console()


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in stats.items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def train_model_cli(config: LMConfig) -> LangModel:
    """
    Train a model with terminal output.

    Args:
        config: Model configuration

    Returns:
        Trained LangModel
    """
    console.print()
    console.print(Panel.fit(
        "[bold blue]Witten-Bell N-gram Model Training[/bold blue]",
        border_style="blue"
    ))
    console.print()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Model Order (n)", str(config.n))
    config_table.add_row("Vocabulary", config.vocab)
    config_table.add_row("Training Corpus", config.train)
    config_table.add_row("Markers", f"{config.bos} {config.eos} {config.unk}")
    config_table.add_row("Count File", config.count_file or "None")

    console.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))
    console.print()

    total_lines = count_lines(config.train)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:

        train_task = progress.add_task("[cyan]Training model...", total=total_lines)

        def update_progress(current, total, stage=""):
            progress.update(train_task, completed=current, description=f"[cyan]{stage}")

        model = LangModel(config, progress_callback=update_progress)

        progress.remove_task(train_task)

    console.print("[green]✓[/green] Training complete!")
    console.print()

    console.print(Panel(
        create_stats_table(model.training_stats),
        title="[bold]Training Statistics[/bold]",
        border_style="yellow"
    ))

    if config.count_file:
        console.print(f"[green]✓[/green] Counts written to: [bold]{config.count_file}[/bold]")

    console.print()
    console.print(Panel(
        create_top_ngrams_table(model),
        title="[bold]Most Frequent N-grams[/bold]",
        border_style="magenta"
    ))
    console.print()
    return model


def create_top_ngrams_table(model: LangModel, top_k: int = 5) -> Table:
    """Create a Rich table of the most frequent n-grams of each order."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Order", style="green", justify="right")
    table.add_column("N-gram", style="white")
    table.add_column("Count", style="yellow", justify="right")

    for order in range(1, model.n + 1):
        for ngram, count in model.get_top_ngrams(order, top_k=top_k):
            table.add_row(str(order), " ".join(ngram), f"{count:,}")

    return table


def evaluate_model_cli(model: LangModel, test_path: str) -> Dict:
    """
    Compute perplexity on a held-out corpus with terminal output.

    Args:
        model: Trained LangModel
        test_path: Path to the evaluation corpus

    Returns:
        Dictionary of evaluation metrics
    """
    console.print(Panel.fit("[bold blue]Model Evaluation[/bold blue]", border_style="blue"))
    console.print()

    lines = list(read_lines(test_path))
    with console.status("[cyan]Computing perplexity..."):
        perplexity = model.perplexity(lines)

    results = {
        'perplexity': perplexity,
        'test_sentences': len(lines),
        'test_tokens': sum(len(split_line(line)) for line in lines),
    }

    console.print(Panel(
        create_stats_table(results),
        title="[bold]Evaluation Results[/bold]",
        border_style="green"
    ))

    return results


def interactive_demo(model: LangModel):
    """Query n-gram probabilities interactively."""
    console.print()
    console.print(Panel.fit(
        "[bold magenta]Interactive Queries[/bold magenta]\n"
        f"Enter 1 to {model.n} words; the last word is predicted from the rest.\n"
        "Type 'quit' to exit.",
        border_style="magenta"
    ))
    console.print()

    while True:
        try:
            user_input = console.input("[bold cyan]Enter n-gram:[/bold cyan] ")
        except (KeyboardInterrupt, EOFError):
            break

        if user_input.lower() in ('quit', 'exit', 'q'):
            break

        words = user_input.split()
        try:
            prob = model.get_prob(model.words_to_ngram(words))
        except InvalidNGramError as e:
            console.print(f"[red]✗[/red] {e} Expected 1 to {model.n} words.")
            continue

        context = " ".join(words[:-1])
        console.print(f"  P({words[-1]} | {context}) = [bold]{prob:.6f}[/bold]")
        console.print()

    console.print("\n[yellow]Goodbye![/yellow]")
