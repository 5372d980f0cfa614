#!filepath: costsense/cli.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import print

from costsense import __version__
from costsense.config.app_config import AppConfig
from costsense.config.reduction_config import ReductionKind
from costsense.ingest.text_format import read_file
from costsense.learners.registry import resolve_base_learner
from costsense.observability.instrumentation import Instrumentation
from costsense.observability.outcomes import OutcomeLog
from costsense.reductions.setup import build_reduction
from costsense.training.pipeline import OnlinePipeline, RunSummary
from costsense.utils.errors import UserInputError
from costsense.utils.logger import init_logging, logs

app = typer.Typer(help="Cost-sensitive reductions CLI")


@app.command()
def version():
    print(f"v{__version__}")


def _load_config(
    config: Optional[Path],
    reduction: Optional[str],
    ldf: Optional[bool],
) -> AppConfig:
    cfg = AppConfig.load(str(config) if config is not None else None)

    if reduction is not None:
        try:
            cfg.reduction.kind = ReductionKind(reduction)
        except ValueError:
            choices = ", ".join(k.value for k in ReductionKind)
            raise UserInputError(f"unknown reduction {reduction!r} (choose from {choices})") from None
    if ldf is not None:
        cfg.reduction.ldf = ldf
    return cfg


@logs.catch("training run failed", log_time=True)
def _run(
    cfg: AppConfig,
    data: Path,
    *,
    passes: int,
    test_only: bool,
    outcomes: Optional[Path],
) -> RunSummary:
    # wap_ldf always reads label-dependent blocks
    multiline = cfg.reduction.ldf or cfg.reduction.kind is ReductionKind.WAP_LDF

    learner = resolve_base_learner(cfg.learner)
    red = build_reduction(cfg.reduction, learner)
    inst = Instrumentation(enabled=cfg.progress.enabled)
    log = OutcomeLog() if outcomes is not None else None
    pipeline = OnlinePipeline(red, inst=inst, outcomes=log)

    print(f"[green]Running {red.name} on {data} (passes={passes})[/green]")

    # totals cover every pass, as the progress counters do
    summary = RunSummary()
    for p in range(passes):
        summary = summary.merge(
            pipeline.run(
                read_file(data, ldf=multiline, strict=False),
                learn=not test_only,
                task=f"pass {p + 1}/{passes}",
            )
        )

    inst.report(str(data))

    if log is not None:
        path = log.write_csv(outcomes)
        logs.info(f"[cli] outcomes -> {path}")

    return summary


@app.command()
def train(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="text examples"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config"),
    reduction: Optional[str] = typer.Option(None, "--reduction", "-r", help="csoaa | wap_ldf"),
    ldf: Optional[bool] = typer.Option(None, "--ldf/--no-ldf", help="multi-line label-dependent input"),
    passes: int = typer.Option(1, min=1, help="passes over the data"),
    test_only: bool = typer.Option(False, "--test-only", help="predict without learning"),
    outcomes: Optional[Path] = typer.Option(None, "--outcomes", help="write per-example CSV"),
):
    """
    Stream DATA through the configured reduction.
    """
    try:
        cfg = _load_config(config, reduction, ldf)
    except UserInputError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    init_logging(cfg.log)

    summary = _run(cfg, data, passes=passes, test_only=test_only, outcomes=outcomes)

    print(
        f"examples={summary.examples} labeled={summary.labeled} "
        f"malformed={summary.malformed} average_loss={summary.average_loss:.6f}"
    )


if __name__ == "__main__":
    app()

# python -m costsense.cli train data.txt --reduction wap_ldf
