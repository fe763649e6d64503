# ABOUTME: Error display helpers for formatting inline messages with Rich.
# ABOUTME: Provides panels for unexpected errors, rate limits, and mutation outcomes.

import traceback

from rich.panel import Panel
from rich.text import Text

from oneword.mutations.results import MutationResult, MutationStatus


def display_error(error: Exception, verbose: bool = False) -> Panel:
    """Format an error as a Rich Panel.

    Args:
        error: The exception to display.
        verbose: If True, include full traceback information.

    Returns:
        A Rich Panel containing formatted error information.
    """
    error_type = type(error).__name__
    error_message = str(error)

    content = Text()
    content.append(f"{error_type}: ", style="bold red")
    content.append(error_message, style="red")

    if verbose:
        content.append("\n\n")
        content.append("Traceback:", style="dim")
        content.append("\n")
        tb_text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        content.append(tb_text, style="dim")

    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(1, 2),
    )


def display_rate_limited(retry_after: int) -> Panel:
    """Display how long to wait after a rate-limited action.

    Args:
        retry_after: Seconds until the next action is allowed.

    Returns:
        A Rich Panel showing when the user can try again.
    """
    message = Text()
    message.append("Slow down.\n\n", style="bold yellow")
    message.append("Try again in ", style="dim")
    message.append(f"{retry_after}s", style="bold cyan")
    message.append(".", style="dim")

    return Panel(
        message,
        title="Rate Limited",
        border_style="yellow",
        padding=(1, 2),
    )


_STATUS_STYLES: dict[MutationStatus, str] = {
    MutationStatus.COMMITTED: "green",
    MutationStatus.ALREADY_DONE: "yellow",
    MutationStatus.ROLLED_BACK: "red",
    MutationStatus.FAILED: "red",
    MutationStatus.RATE_LIMITED: "yellow",
    MutationStatus.INVALID: "red",
    MutationStatus.SKIPPED: "dim",
}


def format_result(result: MutationResult, success: str) -> str:
    """Format a mutation result as a one-line Rich markup message.

    Args:
        result: Outcome of the mutation.
        success: Message to show when the result has no message of its own.

    Returns:
        Markup string suitable for console.print.
    """
    style = _STATUS_STYLES[result.status]
    message = result.message or (success if result.ok else result.status.value.replace("_", " "))
    return f"[{style}]{message}[/{style}]"
