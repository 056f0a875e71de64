from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn

from improc_skeleton.config import SkeletonConfig, load_config
from improc_skeleton.skeletonizers import SkeletonizerKind

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """improc-skeleton command-line interface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def run(
    image: Path = typer.Option(..., "--image", exists=True, readable=True, help="Input image path"),
    out: Path = typer.Option(..., "--out", help="Output image path (.png recommended)"),
    config: Path | None = typer.Option(None, "--config", exists=True, readable=True, help="YAML config path"),
    algorithm: str | None = typer.Option(
        None,
        "--algorithm",
        help="Algorithm override: zhang_suen | rosenfeld | eberly",
    ),
    adjacency: str | None = typer.Option(None, "--adjacency", help="Adjacency override for rosenfeld: four | eight"),
    debug: Path | None = typer.Option(None, "--debug", help="Debug artifacts output directory"),
) -> None:
    """Skeletonize a single image."""
    from improc_skeleton.pipeline import run_pipeline

    try:
        cfg = load_config(config)
        if algorithm is not None or adjacency is not None:
            overrides = cfg.skeleton.model_dump()
            if algorithm is not None:
                overrides["algorithm"] = algorithm
            if adjacency is not None:
                overrides["adjacency_mode"] = adjacency
            cfg.skeleton = SkeletonConfig.model_validate(overrides)

        columns = (TextColumn("[cyan]{task.description}"), BarColumn(), TextColumn("{task.completed}/{task.total}"))
        with Progress(*columns, console=console) as bar:
            task = bar.add_task(cfg.skeleton.algorithm, total=None)

            def _on_progress(current: int, total: int) -> None:
                bar.update(task, completed=current, total=total)

            result = run_pipeline(
                image_path=image,
                output_path=out,
                cfg=cfg,
                debug_dir=debug,
                progress=_on_progress,
            )
    except Exception as exc:  # pragma: no cover - CLI boundary
        console.print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[green]Done.[/green] Output: {result.output_path}")
    console.print(f"[cyan]Algorithm:[/cyan] {result.report.get('algorithm')}")
    kept = result.report.get("foreground_after_px")
    removed = result.report.get("removed_px")
    console.print(f"[cyan]Foreground pixels kept/removed:[/cyan] {kept}/{removed}")


@app.command()
def threshold(
    image: Path = typer.Option(..., "--image", exists=True, readable=True, help="Input image path"),
    out: Path = typer.Option(..., "--out", help="Output image path"),
    value: int = typer.Option(127, "--threshold", min=0, help="Channel threshold"),
) -> None:
    """Binarize an image with a fixed threshold."""
    from improc_skeleton.vision.raster import load_raster, save_raster
    from improc_skeleton.vision.threshold import ThresholdBinaryImageConverter

    try:
        raster = ThresholdBinaryImageConverter(value).convert(load_raster(image))
        written = save_raster(raster, out)
    except Exception as exc:  # pragma: no cover - CLI boundary
        console.print(f"[red]Failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[green]Done.[/green] Output: {written}")


@app.command()
def algorithms() -> None:
    """List available skeletonization algorithms."""
    for kind in SkeletonizerKind:
        console.print(kind.value)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Host for local API server"),
    port: int = typer.Option(8000, "--port", min=1, max=65535, help="Port for local API server"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Run local skeletonization API server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - runtime dependency boundary
        console.print("[red]Missing dependency:[/red] uvicorn")
        raise typer.Exit(code=1) from exc

    endpoint = f"http://{host}:{port}"
    console.print(f"[green]Serving on {endpoint}[/green]")
    console.print(f"[cyan]OpenAPI:[/cyan] {endpoint}/openapi.json")
    uvicorn.run("improc_skeleton.api_server:app", host=host, port=port, reload=reload)


if __name__ == "__main__":  # pragma: no cover
    app()
