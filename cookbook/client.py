import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .config import get_settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Any failed API call: transport error or non-2xx status."""


def _recipe_path(recipe_id: str) -> str:
    return "recipes/" + quote(recipe_id, safe="")


class CookbookClient:
    """Async wrapper around the recipes and comments endpoints.

    Every failure is reported the same way, as ``FetchError``; the error
    payload the API sends back is logged but not interpreted.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if client is None:
            client = httpx.AsyncClient(base_url=base_url or get_settings().api_base_url)
        self.http = client

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            resp = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise FetchError(str(e)) from e
        if not resp.is_success:
            logger.error("%s %s returned %s: %s", method, path, resp.status_code, resp.text)
            raise FetchError(f"{method} {path} returned {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"{method} {path} returned invalid JSON") from e

    async def fetch_recent(self, n: int = 5) -> List[Dict[str, Any]]:
        data = await self._request("GET", "recipes", params={"recent": n})
        return data.get("recipes") or []

    async def fetch_all(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "recipes")
        return data.get("recipes") or []

    async def fetch_recipe(self, recipe_id: str) -> Dict[str, Any]:
        data = await self._request("GET", _recipe_path(recipe_id))
        return data["recipe"]

    async def create_recipe(self, recipe: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("POST", "recipes", json=recipe)
        return data["recipe"]

    async def delete_recipe(self, recipe_id: str) -> None:
        await self._request("DELETE", _recipe_path(recipe_id))

    async def fetch_comments(self, recipe_id: str) -> List[Dict[str, Any]]:
        data = await self._request("GET", "comments", params={"recipeId": recipe_id})
        return data.get("comments") or []

    async def add_comment(self, recipe_id: str, username: str, comment: str) -> Dict[str, Any]:
        data = await self._request(
            "POST",
            "comments",
            json={"recipeId": recipe_id, "username": username, "comment": comment},
        )
        return data["comment"]
