# ABOUTME: Aggregate statistics for the daily recap and the admin analytics view.
# ABOUTME: Computes participants, top and most common words, active users, and posts per prompt.

from collections import Counter
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from sqlmodel import col, func, select

from oneword.database.service import DatabaseService
from oneword.models import Profile, Prompt, Reaction, Word


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=UTC)
    return start, start + timedelta(days=1)


def get_daily_recap(db_service: DatabaseService, day: date) -> dict[str, Any] | None:
    """Summarize the answers to the prompt active on a given day.

    Args:
        db_service: The DatabaseService instance to query.
        day: Calendar day (UTC) to summarize, usually yesterday.

    Returns:
        None if no prompt was active or nobody answered it that day, otherwise:
            - prompt_id / prompt_question: The prompt answered
            - total_participants: Number of words posted
            - top_word: {word, username, reaction_count} for the most reacted
              word, or None if no word got a reaction
            - most_common_word: {word, count} for the most repeated word
              (case-insensitive), or None unless at least two people said it
    """
    start, end = _day_bounds(day)

    with db_service.get_session() as session:
        prompt = session.exec(select(Prompt).where(Prompt.active_date == day)).first()
        if prompt is None:
            return None

        words_stmt = select(Word).where(
            Word.prompt_id == prompt.id,
            col(Word.created_at) >= start,
            col(Word.created_at) < end,
        )
        words = list(session.exec(words_stmt).all())
        if not words:
            return None

        reaction_stmt = (
            select(Reaction.word_id, func.count())
            .where(col(Reaction.word_id).in_([w.id for w in words]))
            .group_by(Reaction.word_id)  # type: ignore[arg-type]
        )
        reaction_counts = dict(session.exec(reaction_stmt).all())

        top_word = None
        max_reactions = 0
        for word in words:
            count = reaction_counts.get(word.id, 0)
            if count > max_reactions:
                max_reactions = count
                author = session.get(Profile, word.user_id)
                top_word = {
                    "word": word.word,
                    "username": author.username if author else "anonymous",
                    "reaction_count": count,
                }

        most_common_word = None
        frequency = Counter(word.word.lower() for word in words)
        if frequency:
            common, count = frequency.most_common(1)[0]
            if count >= 2:
                most_common_word = {"word": common, "count": count}

        return {
            "prompt_id": prompt.id,
            "prompt_question": prompt.question,
            "total_participants": len(words),
            "top_word": top_word,
            "most_common_word": most_common_word,
        }


def get_analytics(
    db_service: DatabaseService, days: int = 30, top_n: int = 10
) -> dict[str, Any]:
    """Usage statistics for the admin view.

    Args:
        db_service: The DatabaseService instance to query.
        days: How many trailing days of activity to include.
        top_n: How many most-reacted words to return.

    Returns:
        Dictionary containing:
            - daily_active_users: list of {day, active_users}, newest first
            - posts_per_prompt: list of {prompt_id, question, active_date, post_count}
            - most_reacted: list of {word_id, word, username, reaction_count}
            - total_posts: Sum of post counts over all prompts
            - avg_posts_per_prompt: Rounded average, 0 when there are no prompts
    """
    since = datetime.now(UTC) - timedelta(days=days)

    with db_service.get_session() as session:
        recent = session.exec(
            select(Word.user_id, Word.created_at).where(col(Word.created_at) >= since)
        ).all()
        active: dict[date, set[str]] = {}
        for user_id, created_at in recent:
            active.setdefault(created_at.date(), set()).add(user_id)
        daily_active_users = [
            {"day": day.isoformat(), "active_users": len(users)}
            for day, users in sorted(active.items(), reverse=True)
        ]

        per_prompt_stmt = (
            select(Prompt.id, Prompt.question, Prompt.active_date, func.count(col(Word.id)))
            .join(Word, col(Word.prompt_id) == col(Prompt.id), isouter=True)
            .group_by(Prompt.id)  # type: ignore[arg-type]
            .order_by(col(Prompt.active_date).desc())
        )
        posts_per_prompt = [
            {
                "prompt_id": prompt_id,
                "question": question,
                "active_date": active_date,
                "post_count": post_count,
            }
            for prompt_id, question, active_date, post_count in session.exec(per_prompt_stmt).all()
        ]

        reacted_stmt = (
            select(Word.id, Word.word, Profile.username, func.count(col(Reaction.id)))
            .join(Reaction, col(Reaction.word_id) == col(Word.id))
            .join(Profile, col(Profile.id) == col(Word.user_id))
            .group_by(Word.id)  # type: ignore[arg-type]
            .order_by(func.count(col(Reaction.id)).desc())
            .limit(top_n)
        )
        most_reacted = [
            {"word_id": word_id, "word": word, "username": username, "reaction_count": count}
            for word_id, word, username, count in session.exec(reacted_stmt).all()
        ]

    total_posts = sum(row["post_count"] for row in posts_per_prompt)
    avg = round(total_posts / len(posts_per_prompt)) if posts_per_prompt else 0

    return {
        "daily_active_users": daily_active_users,
        "posts_per_prompt": posts_per_prompt,
        "most_reacted": most_reacted,
        "total_posts": total_posts,
        "avg_posts_per_prompt": avg,
    }
