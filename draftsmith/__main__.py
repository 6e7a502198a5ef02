"""
draftsmith – plot skeleton → summary → scenes → manuscript
 • run       full pipeline into var/<generated-name>/
 • parse     re-run the summary parser on a saved summary.txt
 • assemble  rebuild manuscript.md for an existing run directory
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from draftsmith import logconf
from draftsmith.config import load_config
from draftsmith.errors import DraftsmithError
from draftsmith.llm.openai_wrapper import OpenAIBackend
from draftsmith.manuscript import build_manuscript
from draftsmith.models import dump
from draftsmith.naming import generate_name
from draftsmith.parsing import check_chapter_count, parse_summary
from draftsmith.pipeline import Pipeline
from draftsmith.plot import JsonPlotSource, PlotGenerator
from draftsmith.store import FileArtifactStore, create_run_dir

app = typer.Typer(pretty_exceptions_show_locals=False, no_args_is_help=True)


def _fail(exc: Exception) -> NoReturn:
    print(f"[red]✘ {type(exc).__name__}: {escape(str(exc))}[/]")
    raise typer.Exit(code=1)


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", exists=True, dir_okay=False),
    model: str | None = typer.Option(None),
    max_tokens: int | None = typer.Option(None, help="completion cap per request"),
    chapters: int | None = typer.Option(None, help="chapters requested in the summary"),
    rounds: int | None = typer.Option(None, help="continuation rounds per scene"),
    attempts: int | None = typer.Option(None, help="attempts per generation request"),
    theme: str | None = typer.Option(None, help="extra instruction for the plot summary"),
    plot: Path | None = typer.Option(None, "--plot", exists=True, dir_okay=False,
                                     help="reuse a saved plotto.json"),
    seed: int | None = typer.Option(None, help="seed for plot and run name"),
    var_dir: Path | None = typer.Option(None),
    log_level: str | None = typer.Option(None),
    lenient: bool = typer.Option(False, "--lenient",
                                 help="warn instead of failing on chapter/scene count mismatches"),
    assemble: bool = typer.Option(True, "--assemble/--no-assemble"),
):
    """Generate a full draft."""
    try:
        cfg = load_config(
            config, model=model, max_tokens=max_tokens, chapter_count=chapters,
            continuation_rounds=rounds, max_attempts=attempts, theme=theme,
            var_dir=var_dir, log_level=log_level, strict_counts=False if lenient else None,
        )
    except (ValidationError, json.JSONDecodeError) as e:
        _fail(e)

    # reject a bad plot file before a run directory exists
    source = JsonPlotSource(plot) if plot else None
    if source is not None:
        try:
            source.generate()
        except DraftsmithError as e:
            _fail(e)

    rng = random.Random(seed)
    try:
        run_dir = create_run_dir(cfg.var_dir, generate_name(rng))
    except DraftsmithError as e:
        _fail(e)
    print(f"[cyan]dirName: {run_dir}[/]")
    logconf.init(cfg.log_level, run_dir / "logs")

    source = source or PlotGenerator(rng.randrange(2**32))
    backend = OpenAIBackend(temperature=cfg.temperature, max_tokens=cfg.max_tokens)
    pipeline = Pipeline(backend, source, FileArtifactStore(run_dir), cfg)
    try:
        result = pipeline.run()
        if assemble:
            manuscript = build_manuscript(run_dir, result.summary)
            print(f"[green]✔ Manuscript saved to {manuscript}[/]")
    except DraftsmithError as e:
        print(f"[yellow]Partial artifacts kept in {run_dir}[/]")
        _fail(e)
    print(f"[green]✔ {len(result.scene_files)} scenes written to {run_dir}[/]")


@app.command()
def parse(
    summary_txt: Path = typer.Argument(..., exists=True, dir_okay=False),
    plot: Path | None = typer.Option(None, "--plot", exists=True, dir_okay=False),
    chapters: int | None = typer.Option(None, help="fail unless exactly N chapters parse"),
):
    """Parse a saved summary.txt and print the result as JSON."""
    try:
        cast = JsonPlotSource(plot).generate().cast if plot else []
        summary = parse_summary(summary_txt.read_text("utf-8"), cast)
        if chapters is not None:
            check_chapter_count(summary, chapters)
    except DraftsmithError as e:
        _fail(e)
    typer.echo(json.dumps(dump(summary), indent=2, ensure_ascii=False))


@app.command("assemble")
def assemble_cmd(run_dir: Path = typer.Argument(..., exists=True, file_okay=False)):
    """Rebuild manuscript.md from the scene files of RUN_DIR."""
    try:
        dest = build_manuscript(run_dir)
    except DraftsmithError as e:
        _fail(e)
    print(f"[green]✔ Manuscript saved to {dest}[/]")


if __name__ == "__main__":
    app()
