import datetime
import math
from typing import Iterable, Optional

from app.schemas.blog import ContentSection, PostCard, PostSummary

WORDS_PER_MINUTE = 200

# date-fns pt-BR abbreviations, as rendered by the "dd MMM yyyy" pattern
PT_BR_MONTHS = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    if not value:
        return None
    # Prismic sends "2021-03-25T19:25:28+0000"; fromisoformat wants "+00:00"
    normalized = value.replace("Z", "+00:00")
    if len(normalized) > 5 and normalized[-5] in "+-" and normalized[-3] != ":":
        normalized = f"{normalized[:-2]}:{normalized[-2:]}"
    return datetime.datetime.fromisoformat(normalized)


def format_date(value: Optional[str]) -> Optional[str]:
    """Format a backend timestamp as "dd MMM yyyy" in pt-BR, e.g. "15 mar 2021"."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return f"{parsed.day:02d} {PT_BR_MONTHS[parsed.month - 1]} {parsed.year}"


def format_edited_at(value: Optional[str]) -> Optional[str]:
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return f"{format_date(value)}, às {parsed.hour:02d}:{parsed.minute:02d}"


def is_edited(
    first_publication_date: Optional[str], last_publication_date: Optional[str]
) -> bool:
    if not last_publication_date:
        return False
    return last_publication_date != first_publication_date


def count_words(text: Optional[str]) -> int:
    return len((text or "").split())


def calculate_reading_time(content: Iterable[ContentSection]) -> int:
    """Minutes needed to read every heading and body block at 200 words/min."""
    total_words = 0
    for section in content:
        total_words += count_words(section.heading)
        total_words += sum(count_words(block.get("text")) for block in section.body)
    return math.ceil(total_words / WORDS_PER_MINUTE)


def post_href(uid: str) -> str:
    return f"/post/{uid}"


def format_summary(post: PostSummary) -> PostCard:
    return PostCard(
        uid=post.uid,
        title=post.title,
        subtitle=post.subtitle,
        author=post.author,
        first_publication_date=format_date(post.first_publication_date),
        href=post_href(post.uid),
    )
