"""Turn API data into HTML fragments.

The functions at the top are pure data transforms and can be tested
without touching markup. The ``render_*`` functions feed them to Jinja2
templates with autoescaping on, so every user supplied string is escaped
for ``& < > " '`` right where it enters the markup. Server-side
sanitizing only bounds input; this escaping is what keeps rendered pages
safe.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

EXCERPT_LENGTH = 120
EXCERPT_INGREDIENTS = 3
EXCERPT_FALLBACK = "A delicious family recipe"
DATE_FALLBACK = "Recently added"
RELATIVE_ABSENT = "just now"
RELATIVE_FALLBACK = "recently"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_ingredients(text: Any) -> List[str]:
    if not isinstance(text, str) or not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def capitalize_category(slug: Any) -> str:
    """``main-course`` -> ``Main Course``."""
    if not slug:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in str(slug).split("-"))


def recipe_excerpt(recipe: Mapping[str, Any]) -> str:
    instructions = recipe.get("instructions")
    if instructions:
        return instructions[:EXCERPT_LENGTH] + "..."
    ingredients = recipe.get("ingredients")
    if ingredients:
        return ", ".join(parse_ingredients(ingredients)[:EXCERPT_INGREDIENTS]) + "..."
    return EXCERPT_FALLBACK


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Best effort conversion to an aware datetime; None when it can't."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # milliseconds since the epoch, as browsers send them
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(timestamp: Any) -> str:
    """Render as ``Month D, YYYY``."""
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return DATE_FALLBACK
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_relative_time(timestamp: Any, now: Optional[datetime] = None) -> str:
    if not timestamp:
        return RELATIVE_ABSENT
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return RELATIVE_FALLBACK

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = int((now - parsed).total_seconds())

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _ago(seconds // 60, "minute")
    if seconds < 86400:
        return _ago(seconds // 3600, "hour")
    if seconds < 604800:
        return _ago(seconds // 86400, "day")
    return format_date(parsed)


def sort_comments(comments: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Newest first; comments without a usable timestamp go last."""
    return sorted(
        comments,
        key=lambda c: parse_timestamp(c.get("createdAt")) or _EPOCH,
        reverse=True,
    )


def results_count_text(shown: int, total: int) -> str:
    plural = "" if total == 1 else "s"
    if shown == total:
        return f"Showing all {total} recipe{plural}"
    return f"Showing {shown} of {total} recipe{plural}"


TEMPLATES = Environment(
    loader=PackageLoader("cookbook", "templates"),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)
TEMPLATES.filters["category"] = capitalize_category
TEMPLATES.filters["excerpt"] = recipe_excerpt
TEMPLATES.filters["date"] = format_date
TEMPLATES.filters["relative"] = format_relative_time
TEMPLATES.filters["ingredients"] = parse_ingredients


def render_recipe_card(recipe: Mapping[str, Any]) -> str:
    return TEMPLATES.get_template("recipe-card.html").render(recipe=recipe)


def render_recipe_grid(recipes: Iterable[Mapping[str, Any]]) -> str:
    return TEMPLATES.get_template("recipe-grid.html").render(recipes=list(recipes))


def render_recipe_detail(recipe: Mapping[str, Any]) -> str:
    return TEMPLATES.get_template("recipe-detail.html").render(recipe=recipe)


def render_comments(
    comments: Iterable[Mapping[str, Any]], now: Optional[datetime] = None
) -> str:
    return TEMPLATES.get_template("comments.html").render(
        comments=sort_comments(comments),
        now=now or datetime.now(timezone.utc),
    )


def render_message(text: str, css_class: str = "error-message") -> str:
    return TEMPLATES.get_template("message.html").render(text=text, css_class=css_class)
