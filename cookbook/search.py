import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "ingredients", "instructions")


@dataclass(frozen=True)
class AppState:
    """What the browsing pages know between events.

    ``all_recipes`` is the full list loaded once from the API; searching
    never goes back to the server.
    """

    all_recipes: Tuple[Dict[str, Any], ...] = ()
    current_recipe_id: Optional[str] = None
    search_term: str = ""
    category: str = ""
    filtered: Tuple[Dict[str, Any], ...] = field(default=())


def filter_recipes(recipes, term: str = "", category: str = "") -> List[Dict[str, Any]]:
    term = (term or "").strip().lower()
    matches = list(recipes)
    if category:
        matches = [r for r in matches if r.get("category") == category]
    if term:
        matches = [
            r for r in matches
            if any(term in (r.get(f) or "").lower() for f in SEARCH_FIELDS)
        ]
    return matches


def load_recipes(state: AppState, recipes) -> AppState:
    recipes = tuple(recipes)
    return replace(state, all_recipes=recipes, filtered=recipes, search_term="", category="")


def perform_search(state: AppState, term: str = "", category: str = "") -> AppState:
    filtered = filter_recipes(state.all_recipes, term, category)
    return replace(state, search_term=term, category=category, filtered=tuple(filtered))


def clear_search(state: AppState) -> AppState:
    return perform_search(state, "", "")


# Client-side checks only. The API does its own validation.
def validate_recipe_form(form: Mapping[str, Any]) -> Optional[str]:
    """Return the first failing rule's message, or None if the form is ok."""
    name = (form.get("name") or "").strip()
    category = form.get("category") or ""
    ingredients = (form.get("ingredients") or "").strip()
    instructions = (form.get("instructions") or "").strip()

    if not name:
        return "Please enter a recipe name."
    if len(name) < 3:
        return "Recipe name must be at least 3 characters long."
    if not category:
        return "Please select a category."
    if not ingredients:
        return "Please enter the ingredients."
    if not instructions:
        return "Please enter the cooking instructions."
    if len(instructions) < 20:
        return "Instructions must be more detailed (at least 20 characters)."
    return None


class Debouncer:
    """Call ``func`` only after ``wait`` seconds without another call.

    Each call cancels the pending one, so a burst of keystrokes results in
    a single call with the last arguments.
    """

    def __init__(self, func: Callable[..., Any], wait: float = 0.3):
        self.func = func
        self.wait = wait
        self._handle: Optional[asyncio.TimerHandle] = None

    def __call__(self, *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.wait, self._fire, args)

    def _fire(self, args) -> None:
        self._handle = None
        self.func(*args)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
