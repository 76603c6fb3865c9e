from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Sequence

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from .container import Container
from ..core.domain.models import SubmissionRequest, SubmissionResult
from ..infra.schemas import DocumentSchema


app = typer.Typer(add_completion=False, help="CRPT document submission client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@contextmanager
def provide_container() -> Iterator[Container]:
    container = Container()
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelName(log_level.value)
    package_name = __package__.split(".", 1)[0] if __package__ else "crpt_client"
    logger = logging.getLogger(package_name)

    # Avoid stacking console handlers when invoked repeatedly in one process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@app.command(help="Submit a document JSON file (camelCase fields) to the create endpoint.")
def submit(
    document_file: Path = typer.Argument(..., help="Path to the document JSON", exists=True, dir_okay=False, readable=True),
    signature: str = typer.Option(..., "--signature", "-s", envvar="CRPT_CLIENT_SIGNATURE", help="Document signature (bearer credential)"),
    copies: int = typer.Option(1, "--copies", "-n", min=1, help="Number of times to submit the document"),
    timeout: Optional[float] = typer.Option(None, help="Seconds to wait for a permit before giving up"),
) -> None:
    try:
        document = DocumentSchema.model_validate_json(document_file.read_text(encoding="utf-8")).to_domain()
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Cannot read {document_file}: {e}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as e:
        typer.echo(f"Invalid document: {e}", err=True)
        raise typer.Exit(code=1)

    requests = [SubmissionRequest(document=document, signature=signature) for _ in range(copies)]
    with provide_container() as container:
        uc = container.submit_batch_uc()
        results = uc.execute(requests, timeout=timeout)
    _print_results(results)
    if any(not r.ok for r in results):
        raise typer.Exit(code=1)


@app.command("show-config", help="Print the effective settings (from CRPT_CLIENT_* environment variables).")
def show_config() -> None:
    container = Container()
    for key, value in container.config().items():
        if isinstance(value, Enum):
            value = value.value
        typer.echo(f"{key}: {value}")


def _print_results(results: Sequence[SubmissionResult]) -> None:
    for i, r in enumerate(results, start=1):
        status = r.status_code if r.status_code is not None else "-"
        if r.ok:
            typer.echo(f"#{i} OK {status}")
        else:
            typer.echo(f"#{i} FAILED {status} {r.reason}")
    ok = sum(1 for r in results if r.ok)
    typer.echo(f"Total: {len(results)}, succeeded: {ok}, failed: {len(results) - ok}")


if __name__ == "__main__":  # pragma: no cover
    app()
