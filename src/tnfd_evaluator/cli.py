"""CLI entry points for TNFD Evaluator."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import uvicorn
import yaml
from dotenv import load_dotenv

from .config import Config
from .evaluation.evaluator import Evaluator
from .llm.openai import OpenAIClient
from .models.evaluation import EvaluationResult
from .web.app import create_app


def setup_logging(verbose: bool, level: str = "INFO") -> None:
    """Configure logging based on verbosity."""
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def load_config(config_path: Optional[Path]) -> Config:
    """Load configuration from a YAML file, or from the environment."""
    if config_path:
        return Config.from_yaml(config_path)
    return Config.from_env()


async def run_single_evaluation(config: Config, report: Path) -> EvaluationResult:
    """Evaluate one report with a short-lived provider client."""
    async with OpenAIClient(config.provider) as client:
        evaluator = Evaluator(client, config=config.evaluation, prompts_dir=config.prompts_dir)
        return await evaluator.evaluate(report)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """TNFD Evaluator - score disclosure reports against the TNFD recommendations."""
    load_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML config file (default: read from environment)",
)
@click.option("--host", type=str, default=None, help="Interface to bind (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default: PORT or 3000)")
@click.pass_context
def serve(
    ctx: click.Context,
    config_path: Optional[Path],
    host: Optional[str],
    port: Optional[int],
) -> None:
    """Run the HTTP evaluation service."""
    cfg = load_config(config_path)
    setup_logging(ctx.obj.get("verbose", False), cfg.log_level)

    if host:
        cfg.server.host = host
    if port:
        cfg.server.port = port

    app = create_app(cfg)
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_level=cfg.log_level.lower())


@main.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML config file (default: read from environment)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Optional path for the JSON result",
)
@click.pass_context
def evaluate(
    ctx: click.Context,
    report: Path,
    config_path: Optional[Path],
    output: Optional[Path],
) -> None:
    """Evaluate a single PDF REPORT against the reference document."""
    cfg = load_config(config_path)
    setup_logging(ctx.obj.get("verbose", False), cfg.log_level)

    click.echo(f"Evaluating report: {report}")
    click.echo(f"Reference document: {cfg.evaluation.reference_path}")

    try:
        result = asyncio.run(run_single_evaluation(cfg, report))

        if output:
            result.to_json(output)
            click.echo(f"Saved result to: {output}")

        click.echo(f"\nEvaluation Summary:")
        click.echo(f"  Score: {result.score}%")
        click.echo(f"\nExplanation:\n{result.explanation}")

    except Exception as e:
        click.echo(f"Error during evaluation: {e}", err=True)
        if ctx.obj.get("verbose"):
            import traceback

            traceback.print_exc()
        sys.exit(1)


@main.command("show-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML config file (default: read from environment)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the configuration to this YAML file instead of printing it",
)
def show_config(config_path: Optional[Path], output: Optional[Path]) -> None:
    """Show the effective configuration (the API key is never included)."""
    cfg = load_config(config_path)

    if output:
        cfg.to_yaml(output)
        click.echo(f"Saved configuration to: {output}")
    else:
        click.echo(yaml.dump(cfg.to_dict(), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    main()
