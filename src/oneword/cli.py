# ABOUTME: Command line interface for the one-word-per-day feed using Typer.
# ABOUTME: Provides sign-in, posting, reacting, following, deleting, recap, and admin commands.

import asyncio
import mimetypes
from collections.abc import Coroutine
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from oneword.auth import SessionManager
from oneword.backend import LocalDataStore, LocalObjectStorage
from oneword.config import Settings, get_settings
from oneword.database import DatabaseService
from oneword.database.stats import get_analytics, get_daily_recap
from oneword.display import (
    FeedTable,
    display_analytics,
    display_connections,
    display_error,
    display_profile,
    display_rate_limited,
    display_recap,
    format_result,
    render_notifications,
    render_prompts,
)
from oneword.errors import NotAdminError, NotAuthenticatedError, OneWordError
from oneword.feed import FeedService
from oneword.logging_setup import setup_logging
from oneword.models import Profile, Prompt, ReactionEmoji, Word
from oneword.mutations import (
    DeletePostFlow,
    FollowToggle,
    MutationResult,
    MutationStatus,
    PostWordFlow,
    ReactionToggle,
)
from oneword.notifications import NotificationService
from oneword.profiles.service import ProfileEditor, ProfileUpdateError
from oneword.prompts.service import PromptError, PromptManager
from oneword.rate_limit import ActionType, RateLimitDisplay, RateLimiter

app = typer.Typer(
    name="oneword",
    help="Say one word a day. React, follow, and see what everyone else said.",
    add_completion=False,
)
prompt_app = typer.Typer(help="Manage daily prompts (admins only).")
profile_app = typer.Typer(help="View profiles and edit your own.")
app.add_typer(prompt_app, name="prompt")
app.add_typer(profile_app, name="profile")

console = Console()

T = TypeVar("T")
M = TypeVar("M", Word, Prompt)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def _today() -> date:
    return datetime.now(UTC).date()


def _open_db(settings: Settings) -> DatabaseService:
    db_service = DatabaseService(db_path=settings.db_path)
    db_service.init_db()
    return db_service


def _require_user(db_service: DatabaseService, settings: Settings) -> Profile:
    """Return the signed-in profile or exit with a hint to log in."""
    user_id = SessionManager(accounts_file=settings.accounts_file).current_user_id()
    profile = db_service.get_profile(user_id) if user_id else None
    if profile is None:
        console.print("[red]You are not signed in.[/red]")
        console.print("[dim]Run 'oneword login <username>' first.[/dim]")
        raise typer.Exit(code=1)
    return profile


def _single_match(matches: list[M], noun: str, id_prefix: str) -> M:
    """Return the one row a shortened id points at, or exit explaining why not."""
    if not matches:
        console.print(f"[red]No {noun} with id '{id_prefix}'.[/red]")
        raise typer.Exit(code=1)
    if len(matches) > 1:
        console.print(f"[yellow]Id '{id_prefix}' is ambiguous. Use more characters.[/yellow]")
        raise typer.Exit(code=1)
    return matches[0]


def _resolve_word(db_service: DatabaseService, word_id: str) -> Word:
    return _single_match(db_service.find_words_by_id_prefix(word_id), "word", word_id)


def _resolve_prompt(db_service: DatabaseService, prompt_id: str) -> Prompt:
    return _single_match(db_service.find_prompts_by_id_prefix(prompt_id), "prompt", prompt_id)


def _parse_emoji(value: str) -> str:
    """Accept an emoji or its name (fire, eyes, skull, heart, thinking)."""
    try:
        return ReactionEmoji(value).value
    except ValueError:
        pass
    try:
        return ReactionEmoji[value.strip().upper()].value
    except KeyError:
        names = ", ".join(f"{e.name.lower()} ({e.value})" for e in ReactionEmoji)
        raise typer.BadParameter(f"Choose one of: {names}") from None


def _report(result: MutationResult, success: str) -> None:
    """Print a mutation outcome inline and exit non-zero on failure."""
    if result.status is MutationStatus.RATE_LIMITED:
        console.print(display_rate_limited(result.retry_after))
        raise typer.Exit(code=1)
    console.print(format_result(result, success))
    if result.status in (MutationStatus.ROLLED_BACK, MutationStatus.FAILED, MutationStatus.INVALID):
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """One word a day.

    Answer the daily prompt with a single word, react to what others said,
    and follow the people whose words you like.
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


@app.command()
def login(
    username: Annotated[str, typer.Argument(help="Username to sign in as.")],
) -> None:
    """Sign in, creating the profile on first use."""
    username = username.strip().lstrip("@")
    if not username:
        console.print("[red]Username cannot be empty.[/red]")
        raise typer.Exit(code=1)

    settings = get_settings()
    db_service = _open_db(settings)
    profile = db_service.get_or_create_profile(username)
    if username in settings.admin_usernames and not profile.is_admin:
        profile.is_admin = True
        profile = db_service.save_profile(profile)

    SessionManager(accounts_file=settings.accounts_file).sign_in(profile.id, profile.username)
    console.print(f"[green]Signed in as [bold]@{profile.username}[/bold].[/green]")


@app.command()
def logout() -> None:
    """Sign out."""
    settings = get_settings()
    SessionManager(accounts_file=settings.accounts_file).sign_out()
    console.print("[green]Signed out.[/green]")


@app.command()
def whoami() -> None:
    """Show the signed-in user, their streak, and follow counts."""
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")
    table.add_row("User:", f"[cyan]@{profile.username}[/cyan]")
    if profile.display_name:
        table.add_row("Name:", profile.display_name)
    table.add_row("Streak:", f"{profile.current_streak} (best {profile.longest_streak})")
    table.add_row("Followers:", str(db_service.count_followers(profile.id)))
    table.add_row("Following:", str(db_service.count_following(profile.id)))
    table.add_row("Unread:", str(db_service.count_unread_notifications(profile.id)))
    if profile.is_admin:
        table.add_row("Role:", "[magenta]admin[/magenta]")
    console.print(table)


@app.command()
def post(
    word: Annotated[str, typer.Argument(help="Your one word for today.")],
) -> None:
    """Answer today's prompt with one word."""
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)

    store = LocalDataStore(db_service)
    prompt = _run(PromptManager(store, profile.id).todays_prompt(_today()))
    if prompt is not None:
        console.print(f"[dim]Today's prompt:[/dim] [magenta]{prompt['question']}[/magenta]")

    flow = PostWordFlow(
        user_id=profile.id,
        prompt_id=prompt["id"] if prompt else None,
        store=store,
        limiter=RateLimiter.for_action(ActionType.POST_WORD, settings),
    )
    result = _run(flow.submit(word))
    _report(result, f"Said: {flow.posted_word}")

    if flow.posted_word:
        panel = display_connections(flow.posted_word, flow.connections)
        if panel is not None:
            console.print(panel)


@app.command()
def feed(
    following: Annotated[
        bool,
        typer.Option("--following", "-f", help="Only words from people you follow."),
    ] = False,
    today_only: Annotated[
        bool,
        typer.Option("--today", help="Only answers to today's prompt."),
    ] = False,
    prompt_ref: Annotated[
        str | None,
        typer.Option("--prompt", "-p", help="Only answers to this prompt (id from 'prompt list')."),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", help="Maximum number of words to show."),
    ] = None,
) -> None:
    """Show the latest words."""
    if today_only and prompt_ref is not None:
        raise typer.BadParameter("Use either --today or --prompt.", param_hint="--prompt")

    settings = get_settings()
    db_service = _open_db(settings)
    viewer_id = SessionManager(accounts_file=settings.accounts_file).current_user_id()

    if following and viewer_id is None:
        console.print("[yellow]Sign in to see words from people you follow.[/yellow]")
        raise typer.Exit(code=1)

    prompt_id = None
    title = "Following" if following else "Everyone"
    if today_only:
        todays = _run(PromptManager(LocalDataStore(db_service), viewer_id).todays_prompt(_today()))
        if todays is None:
            console.print("[yellow]There is no prompt today.[/yellow]")
            return
        prompt_id = todays["id"]
    elif prompt_ref is not None:
        prompt = _resolve_prompt(db_service, prompt_ref)
        prompt_id = prompt.id
        title = f"{prompt.active_date.isoformat()}: {prompt.question}"

    items = FeedService(db_service).get_feed(
        viewer_id=viewer_id,
        following_only=following,
        prompt_id=prompt_id,
        limit=limit or settings.feed_limit,
    )
    if not items:
        console.print("[dim]Silence. Be the first to say something.[/dim]")
        return
    console.print(FeedTable().render(items, title=title))


@app.command()
def react(
    word_id: Annotated[str, typer.Argument(help="Word id (the short id from the feed works).")],
    emoji: Annotated[
        str, typer.Argument(help="Emoji or name: fire, eyes, skull, heart, thinking.")
    ],
) -> None:
    """React to a word. Reacting with your current emoji removes it."""
    reaction = _parse_emoji(emoji)
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)
    word = _resolve_word(db_service, word_id)

    item = FeedService(db_service).build_items([word], profile.id)[0]
    store = LocalDataStore(db_service)
    notifications = NotificationService(store)
    toggle = ReactionToggle(
        word_id=word.id,
        user_id=profile.id,
        store=store,
        state=item.reaction_state(),
        limiter=RateLimiter.for_action(ActionType.REACT, settings),
        author_id=word.user_id,
        notifications=notifications,
    )

    async def run() -> MutationResult:
        result = await toggle.toggle(reaction)
        await notifications.drain()
        return result

    result = _run(run())
    summary = FeedTable().format_reactions(toggle.state.counts) or "no reactions"
    _report(result, f"{word.word}: {summary}")


@app.command()
def follow(
    username: Annotated[str, typer.Argument(help="User to follow or unfollow.")],
) -> None:
    """Follow a user, or unfollow if you already follow them."""
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)

    view = FeedService(db_service).get_profile_view(username.lstrip("@"), viewer_id=profile.id)
    if view is None:
        console.print(f"[red]No user named @{username.lstrip('@')}.[/red]")
        raise typer.Exit(code=1)
    if view.profile.id == profile.id:
        console.print("[yellow]You can't follow yourself.[/yellow]")
        raise typer.Exit(code=1)

    store = LocalDataStore(db_service)
    notifications = NotificationService(store)
    toggle = FollowToggle(
        follower_id=profile.id,
        following_id=view.profile.id,
        store=store,
        state=view.follow_state(),
        limiter=RateLimiter.for_action(ActionType.FOLLOW, settings),
        notifications=notifications,
    )

    async def run() -> MutationResult:
        result = await toggle.toggle()
        await notifications.drain()
        return result

    result = _run(run())
    verb = "Following" if toggle.state.is_following else "Not following"
    _report(
        result,
        f"{verb} @{view.profile.username} ({toggle.state.follower_count} followers)",
    )


@app.command()
def delete(
    word_id: Annotated[str, typer.Argument(help="Id of your word to delete.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation question."),
    ] = False,
) -> None:
    """Delete one of your words."""
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)
    word = _resolve_word(db_service, word_id)
    if word.user_id != profile.id:
        console.print("[red]You can only delete your own words.[/red]")
        raise typer.Exit(code=1)

    flow = DeletePostFlow(
        word_id=word.id,
        user_id=profile.id,
        store=LocalDataStore(db_service),
        limiter=RateLimiter.for_action(ActionType.DELETE_POST, settings),
    )
    flow.request()
    if not yes and not Confirm.ask(f"Delete [bold]{word.word}[/bold]?"):
        flow.cancel()
        console.print("[dim]Kept.[/dim]")
        return

    _report(_run(flow.confirm()), "Deleted.")


@app.command()
def recap(
    day: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Day to recap (YYYY-MM-DD). Defaults to yesterday."),
    ] = None,
) -> None:
    """Show the recap of a day's prompt."""
    settings = get_settings()
    db_service = _open_db(settings)

    try:
        target = date.fromisoformat(day) if day else _today() - timedelta(days=1)
    except ValueError:
        raise typer.BadParameter("Use the YYYY-MM-DD format.", param_hint="--date") from None

    summary = get_daily_recap(db_service, target)
    if summary is None:
        console.print(f"[dim]Nothing to recap for {target.isoformat()}.[/dim]")
        return
    console.print(display_recap(summary))


@app.command()
def notifications(
    limit: Annotated[
        int | None,
        typer.Option("--limit", help="Maximum number of notifications to show."),
    ] = None,
) -> None:
    """Show your notifications and mark them as read."""
    settings = get_settings()
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)
    service = NotificationService(LocalDataStore(db_service))

    async def run() -> list[dict[str, Any]]:
        rows = await service.list_for(profile.id, limit=limit or settings.notification_limit)
        if rows and await service.unread_count(profile.id):
            await service.mark_all_read(profile.id)
        return rows

    try:
        rows = _run(run())
    except OneWordError as e:
        console.print(display_error(e))
        raise typer.Exit(code=1) from None
    if not rows:
        console.print("[dim]No notifications yet.[/dim]")
        return

    actors = db_service.get_profiles(sorted({row["actor_id"] for row in rows}))
    usernames = {actor_id: actor.username for actor_id, actor in actors.items()}
    console.print(render_notifications(rows, usernames))


@app.command()
def status() -> None:
    """Show the configured rate limits and, for admins, usage analytics.

    Limits are counted within a single command run, so every run starts with
    the full allowance shown here.
    """
    settings = get_settings()
    db_service = _open_db(settings)

    limiters = {
        action.value.replace("_", " "): RateLimiter.for_action(action, settings)
        for action in ActionType
    }
    console.print(RateLimitDisplay(limiters).render_status())

    user_id = SessionManager(accounts_file=settings.accounts_file).current_user_id()
    profile = db_service.get_profile(user_id) if user_id else None
    if profile is not None and profile.is_admin:
        console.print()
        console.print(display_analytics(get_analytics(db_service)))


def _prompt_manager(settings: Settings) -> tuple[DatabaseService, PromptManager]:
    db_service = _open_db(settings)
    user_id = SessionManager(accounts_file=settings.accounts_file).current_user_id()
    return db_service, PromptManager(LocalDataStore(db_service), user_id)


def _run_admin(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return _run(coro)
    except (NotAdminError, NotAuthenticatedError, PromptError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter("Use the YYYY-MM-DD format.", param_hint="--date") from None


@prompt_app.command("list")
def prompt_list(
    limit: Annotated[int, typer.Option("--limit", help="Maximum prompts to show.")] = 30,
) -> None:
    """List prompts, newest first."""
    db_service = _open_db(get_settings())
    prompts = db_service.get_prompts(limit=limit)
    if not prompts:
        console.print("[dim]No prompts yet.[/dim]")
        return
    word_counts = db_service.count_words_by_prompt([prompt.id for prompt in prompts])
    console.print(render_prompts(prompts, word_counts))


@prompt_app.command("add")
def prompt_add(
    question: Annotated[str, typer.Argument(help="The question to ask.")],
    active_date: Annotated[str, typer.Option("--date", "-d", help="Day it runs (YYYY-MM-DD).")],
) -> None:
    """Schedule a prompt for a day."""
    day = _parse_date(active_date)
    _, manager = _prompt_manager(get_settings())
    row = _run_admin(manager.create(question, day))
    console.print(f"[green]Scheduled for {day.isoformat()}:[/green] {row['question']}")


@prompt_app.command("edit")
def prompt_edit(
    prompt_id: Annotated[str, typer.Argument(help="Id of the prompt (the short id works).")],
    question: Annotated[str, typer.Argument(help="New question.")],
    active_date: Annotated[str, typer.Option("--date", "-d", help="Day it runs (YYYY-MM-DD).")],
) -> None:
    """Change a prompt's question and day."""
    day = _parse_date(active_date)
    db_service, manager = _prompt_manager(get_settings())
    _run_admin(manager.require_admin())
    prompt = _resolve_prompt(db_service, prompt_id)
    _run_admin(manager.update(prompt.id, question, day))
    console.print("[green]Prompt updated.[/green]")


@prompt_app.command("remove")
def prompt_remove(
    prompt_id: Annotated[str, typer.Argument(help="Id of the prompt (the short id works).")],
) -> None:
    """Remove a prompt."""
    db_service, manager = _prompt_manager(get_settings())
    _run_admin(manager.require_admin())
    prompt = _resolve_prompt(db_service, prompt_id)
    if _run_admin(manager.delete(prompt.id)):
        console.print("[green]Prompt removed.[/green]")
    else:
        console.print("[yellow]Prompt not found.[/yellow]")


@profile_app.command("show")
def profile_show(
    username: Annotated[str, typer.Argument(help="User whose profile to show.")],
    limit: Annotated[int, typer.Option("--limit", help="Maximum words to show.")] = 20,
) -> None:
    """Show a user's counts, streak, and latest words."""
    settings = get_settings()
    db_service = _open_db(settings)
    viewer_id = SessionManager(accounts_file=settings.accounts_file).current_user_id()

    name = username.strip().lstrip("@")
    view = FeedService(db_service).get_profile_view(name, viewer_id=viewer_id, limit=limit)
    if view is None:
        console.print(f"[red]No user named @{name}.[/red]")
        raise typer.Exit(code=1)

    console.print(display_profile(view))
    if view.items:
        console.print(FeedTable().render(view.items, title="Words"))
    else:
        console.print("[dim]No words yet.[/dim]")


def _profile_editor(settings: Settings) -> ProfileEditor:
    db_service = _open_db(settings)
    profile = _require_user(db_service, settings)
    return ProfileEditor(
        user_id=profile.id,
        store=LocalDataStore(db_service),
        storage=LocalObjectStorage(settings.avatars_dir),
        max_avatar_bytes=settings.max_avatar_bytes,
    )


@profile_app.command("name")
def profile_name(
    name: Annotated[str, typer.Argument(help="Display name. Pass an empty string to clear.")],
) -> None:
    """Set your display name."""
    editor = _profile_editor(get_settings())
    try:
        row = _run(editor.update_display_name(name))
    except ProfileUpdateError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None
    console.print(f"[green]Display name: {row['display_name'] or '(none)'}[/green]")


@profile_app.command("avatar")
def profile_avatar(
    path: Annotated[
        Path, typer.Argument(help="Image file to upload.", exists=True, dir_okay=False)
    ],
) -> None:
    """Upload a new avatar image."""
    editor = _profile_editor(get_settings())
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        url = _run(editor.upload_avatar(path.name, path.read_bytes(), content_type))
    except ProfileUpdateError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None
    console.print(f"[green]Avatar updated:[/green] [dim]{url}[/dim]")


if __name__ == "__main__":
    app()
