"""Page controller for the cookbook front-end.

Each method matches something a visitor does (open the home page, type
in the search box, open a recipe, submit a form) and returns a ``Page``
with the HTML fragments to show. Failed API calls are never explained to
the visitor: they all collapse into one generic message per action.

There is no request cancellation: if two loads overlap, whichever
response arrives last is what ends up shown.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from . import render
from .client import CookbookClient, FetchError
from .config import get_settings
from .search import (
    AppState,
    Debouncer,
    clear_search,
    load_recipes,
    perform_search,
    validate_recipe_form,
)

logger = logging.getLogger(__name__)

LOAD_FAILED = "Unable to load recipes. Please try again later."
DETAIL_FAILED = "Unable to load recipe details."
SAVE_FAILED = "Failed to save recipe. Please try again."
EMPTY_COLLECTION = "No recipes in the collection yet. Be the first to add one!"
NO_MATCHES = "No recipes match your search."
NO_COMMENTS = "No comments yet. Be the first to share your thoughts!"

FORM_FIELDS = ("name", "category", "prepTime", "cookTime", "ingredients", "instructions", "notes")


@dataclass
class Notification:
    message: str
    kind: str = "info"


@dataclass
class Page:
    html: str = ""
    count_text: str = ""
    comments_html: str = ""
    notification: Optional[Notification] = None
    ok: bool = True


class CookbookUI:
    def __init__(
        self,
        client: CookbookClient,
        state: Optional[AppState] = None,
        *,
        recent: Optional[int] = None,
        debounce: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.client = client
        self.state = state or AppState()
        self.recent = recent or settings.recent_recipes
        self.listing: Optional[Page] = None
        self.modal: Optional[Page] = None
        wait = settings.search_debounce_seconds if debounce is None else debounce
        self._debounced_search = Debouncer(self._search_from_input, wait)

    # Home page

    async def home(self) -> Page:
        try:
            recipes = await self.client.fetch_recent(self.recent)
        except FetchError:
            logger.error("Error fetching recent recipes", exc_info=True)
            return Page(html=render.render_message(LOAD_FAILED), ok=False)
        if not recipes:
            return Page(html=render.render_message(EMPTY_COLLECTION, "empty-state"))
        return Page(html="".join(render.render_recipe_card(r) for r in recipes))

    # Listing page

    async def browse(self, recipe_id: Optional[str] = None) -> Page:
        """Load every recipe; ``recipe_id`` is a deep link that opens the modal."""
        try:
            recipes = await self.client.fetch_all()
        except FetchError:
            logger.error("Error fetching recipes", exc_info=True)
            self.listing = Page(html=render.render_message(LOAD_FAILED), ok=False)
            return self.listing

        self.state = load_recipes(self.state, recipes)
        if not recipes:
            self.listing = Page(html=render.render_message(EMPTY_COLLECTION, "empty-state"))
            return self.listing

        self.listing = self._listing_page()
        if recipe_id:
            await self.open_recipe(recipe_id)
        return self.listing

    def _listing_page(self) -> Page:
        shown = self.state.filtered
        total = len(self.state.all_recipes)
        if shown:
            html = render.render_recipe_grid(shown)
        else:
            html = render.render_message(NO_MATCHES, "empty-state")
        return Page(html=html, count_text=render.results_count_text(len(shown), total))

    def search(self, term: str = "", category: str = "") -> Page:
        self.state = perform_search(self.state, term, category)
        self.listing = self._listing_page()
        return self.listing

    def on_search_input(self, term: str) -> None:
        """Search box keystroke; the search runs once typing pauses."""
        self._debounced_search(term)

    def _search_from_input(self, term: str) -> None:
        self.search(term, self.state.category)

    def on_category_change(self, category: str) -> Page:
        return self.search(self.state.search_term, category)

    def clear_search(self) -> Page:
        self._debounced_search.cancel()
        self.state = clear_search(self.state)
        self.listing = self._listing_page()
        return self.listing

    # Recipe modal

    async def open_recipe(self, recipe_id: str) -> Page:
        self.state = replace(self.state, current_recipe_id=recipe_id)
        try:
            recipe = await self.client.fetch_recipe(recipe_id)
        except FetchError:
            logger.error("Error fetching recipe %s", recipe_id, exc_info=True)
            self.modal = Page(html=render.render_message(DETAIL_FAILED), ok=False)
            return self.modal

        self.modal = Page(
            html=render.render_recipe_detail(recipe),
            comments_html=await self.load_comments(recipe_id),
        )
        return self.modal

    def close_recipe(self) -> None:
        self.state = replace(self.state, current_recipe_id=None)
        self.modal = None

    async def load_comments(self, recipe_id: str) -> str:
        try:
            comments = await self.client.fetch_comments(recipe_id)
        except FetchError:
            logger.error("Error fetching comments for %s", recipe_id, exc_info=True)
            comments = []
        if not comments:
            return render.render_message(NO_COMMENTS, "no-comments")
        return render.render_comments(comments)

    # Forms

    async def submit_recipe(self, form: Mapping[str, Any]) -> Page:
        error = validate_recipe_form(form)
        if error:
            return Page(html=render.render_message(error, "form-error"), ok=False)

        payload: Dict[str, Any] = {}
        for name in FORM_FIELDS:
            value = form.get(name) or ""
            payload[name] = value.strip() if isinstance(value, str) else value

        try:
            await self.client.create_recipe(payload)
        except FetchError:
            logger.error("Error submitting recipe", exc_info=True)
            return Page(
                html=render.render_message(SAVE_FAILED, "form-error"),
                notification=Notification("Failed to save recipe", "error"),
                ok=False,
            )
        return Page(
            html=render.render_message("Recipe added successfully!", "form-success"),
            notification=Notification("Recipe added successfully!", "success"),
        )

    async def submit_comment(self, username: str, comment: str) -> Page:
        recipe_id = self.state.current_recipe_id
        if not recipe_id:
            return Page(ok=False)

        username = (username or "").strip()
        comment = (comment or "").strip()
        if not username or not comment:
            return Page(notification=Notification("Please fill in all fields", "error"), ok=False)

        try:
            await self.client.add_comment(recipe_id, username, comment)
        except FetchError:
            logger.error("Error adding comment", exc_info=True)
            return Page(notification=Notification("Failed to add comment", "error"), ok=False)

        comments_html = await self.load_comments(recipe_id)
        if self.modal is not None:
            self.modal.comments_html = comments_html
        return Page(
            comments_html=comments_html,
            notification=Notification("Comment added successfully!", "success"),
        )
