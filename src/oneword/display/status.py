# ABOUTME: Status display functions for the daily recap, admin analytics, and profile pages.
# ABOUTME: Provides Rich panels summarizing answers, overall activity, and a user's counts.

from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oneword.feed import ProfileView


def display_recap(recap: dict[str, Any]) -> Panel:
    """Display the recap of a day's prompt.

    Args:
        recap: Dictionary from get_daily_recap.

    Returns:
        Rich Panel containing the recap.
    """
    content = Text()
    content.append(f"{recap['prompt_question']}\n\n", style="bold magenta")
    content.append("Participants: ", style="dim")
    content.append(f"{recap['total_participants']}\n", style="cyan")

    top = recap.get("top_word")
    if top:
        content.append("Top word: ", style="dim")
        content.append(top["word"], style="bold")
        content.append(f" by @{top['username']} ({top['reaction_count']} reactions)\n")

    common = recap.get("most_common_word")
    if common:
        content.append("Most said: ", style="dim")
        content.append(common["word"], style="bold")
        content.append(f" ({common['count']} people)")

    return Panel(
        content,
        title="Daily Recap",
        border_style="magenta",
        padding=(1, 2),
    )


def display_analytics(stats: dict[str, Any]) -> Panel:
    """Render analytics as a Rich Panel.

    Args:
        stats: Dictionary from get_analytics.

    Returns:
        Rich Panel containing summary numbers and the most reacted words.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    daily = stats.get("daily_active_users", [])
    today_active = daily[0]["active_users"] if daily else 0
    table.add_row("Active (latest day):", f"[cyan]{today_active}[/cyan]")
    table.add_row("Total posts:", f"[cyan]{stats.get('total_posts', 0)}[/cyan]")
    table.add_row("Avg per prompt:", f"[cyan]{stats.get('avg_posts_per_prompt', 0)}[/cyan]")

    for row in stats.get("most_reacted", [])[:5]:
        table.add_row(
            "Most reacted:",
            f"{row['word']} [dim]@{row['username']}[/dim] ({row['reaction_count']})",
        )

    return Panel(
        table,
        title="Analytics",
        border_style="blue",
        padding=(1, 2),
    )


def display_connections(word: str, usernames: list[str]) -> Panel | None:
    """Show who else said the same word, if anyone.

    Returns:
        Rich Panel, or None when nobody else matched (yet).
    """
    if not usernames:
        return None

    names = ", ".join(f"@{name}" for name in usernames)
    noun = "person" if len(usernames) == 1 else "people"
    message = Text.from_markup(
        f"[bold]{len(usernames)}[/bold] other {noun} said [magenta]{word}[/magenta]: {names}"
    )
    return Panel(message, title="Connections", border_style="cyan", padding=(0, 2))


def display_profile(view: ProfileView) -> Panel:
    """Render the header of a profile page.

    Args:
        view: ProfileView from FeedService.get_profile_view.

    Returns:
        Rich Panel with the user's streak, post count, and follow counts.
    """
    profile = view.profile
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    if profile.display_name:
        table.add_row("Name:", profile.display_name)
    table.add_row("Posts:", f"[cyan]{view.post_count}[/cyan]")
    table.add_row(
        "Streak:", f"[cyan]{profile.current_streak}[/cyan] (best {profile.longest_streak})"
    )
    table.add_row("Followers:", f"[cyan]{view.follower_count}[/cyan]")
    table.add_row("Following:", f"[cyan]{view.following_count}[/cyan]")
    if view.is_following:
        table.add_row("", "[green]You follow them[/green]")

    return Panel(
        table,
        title=f"@{profile.username}",
        border_style="cyan",
        padding=(1, 2),
    )
