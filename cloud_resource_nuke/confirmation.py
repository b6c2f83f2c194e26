"""Operator confirmation before anything is destroyed."""

from __future__ import annotations
import time
from typing import Sequence

from rich.console import Console

from .models.config import CONFIRMATION_WORD, FORCE_COUNTDOWN_SECONDS
from .utils import get_logger

logger = get_logger()
console = Console()

WARNING_BANNER = (
    "THE NEXT STEPS ARE DESTRUCTIVE AND COMPLETELY IRREVERSIBLE, PROCEED WITH CAUTION!!!"
)


def prompt_for_confirmation(question: str) -> bool:
    """Ask the operator to type the confirmation word."""
    console.print(f"\n[bold bright_red]{WARNING_BANNER}[/bold bright_red]")
    try:
        answer = console.input(
            f"\n{question} Enter '{CONFIRMATION_WORD}' to confirm: "
        )
    except EOFError:
        logger.warning("No confirmation received (stdin closed)")
        return False
    return answer.strip().lower() == CONFIRMATION_WORD


def force_countdown(seconds: int = FORCE_COUNTDOWN_SECONDS) -> bool:
    logger.info(
        f"The --force flag is set, so waiting for {seconds} seconds before proceeding "
        "to nuke everything. If you don't want to proceed, hit CTRL+C now!!"
    )
    for i in range(seconds, 0, -1):
        console.print(f"{i}...", end="")
        time.sleep(1)
    console.print()
    return True


def confirm(
    summary_lines: Sequence[str],
    force: bool = False,
    question: str = "Are you sure you want to nuke all listed resources?",
    countdown_seconds: int = FORCE_COUNTDOWN_SECONDS,
) -> bool:
    """Show what will be destroyed and return whether to proceed."""
    for line in summary_lines:
        console.print(line, markup=False, highlight=False)
    logger.info(f"{len(summary_lines)} resources listed for deletion")

    if force:
        return force_countdown(countdown_seconds)
    return prompt_for_confirmation(question)
