# flake8: noqa
import asyncio

import httpx
import pytest

from cookbook.client import CookbookClient, FetchError
from cookbook.ui import CookbookUI


PIE = {
    "name": "Grandma's Pie",
    "ingredients": "flour\nsugar",
    "instructions": "Mix and bake for one hour at 350 degrees.",
}


def failing_client(status=500, exc=None):
    def handler(request):
        if exc is not None:
            raise exc
        return httpx.Response(status, json={"error": "Internal server error"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver/api")
    return CookbookClient(client=http)


@pytest.mark.asyncio
async def test_end_to_end_pie_and_comment(api):
    created = await api.create_recipe(PIE)
    assert created["id"]

    fetched = await api.fetch_recipe(created["id"])
    for field in ("name", "ingredients", "instructions"):
        assert fetched[field] == PIE[field]

    comment = await api.add_comment(created["id"], "Ann", "Delicious!")
    assert comment["username"] == "Ann"

    comments = await api.fetch_comments(created["id"])
    assert len(comments) == 1
    assert comments[0]["comment"] == "Delicious!"


@pytest.mark.asyncio
async def test_fetch_recent_and_all(api):
    for i in range(4):
        await api.create_recipe(dict(PIE, name=f"Pie {i}"))
    assert len(await api.fetch_recent(2)) == 2
    assert len(await api.fetch_all()) == 4


@pytest.mark.asyncio
async def test_non_2xx_is_fetch_error(api):
    with pytest.raises(FetchError):
        await api.fetch_recipe("missing")
    with pytest.raises(FetchError):
        await api.create_recipe({"name": "No body"})
    with pytest.raises(FetchError):
        await api.add_comment("missing", "Ann", "Hi")


@pytest.mark.asyncio
async def test_transport_error_is_fetch_error():
    client = failing_client(exc=httpx.ConnectError("connection refused"))
    with pytest.raises(FetchError):
        await client.fetch_all()


@pytest.mark.asyncio
async def test_delete_recipe(api):
    created = await api.create_recipe(PIE)
    await api.delete_recipe(created["id"])
    with pytest.raises(FetchError):
        await api.fetch_recipe(created["id"])
    with pytest.raises(FetchError):
        await api.delete_recipe(created["id"])


@pytest.mark.asyncio
async def test_recipe_id_is_quoted_into_one_path_segment(api):
    await api.create_recipe(PIE)
    # unquoted, this id would hit the ?recent listing instead
    with pytest.raises(FetchError):
        await api.fetch_recipe("x?recent=1")

    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"recipe": {}})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver/api")
    client = CookbookClient(client=http)
    await client.fetch_recipe("a/b?recent=1")
    await client.delete_recipe("a b")
    assert seen[0].raw_path == b"/api/recipes/a%2Fb%3Frecent%3D1"
    assert seen[0].query == b""
    assert seen[1].raw_path == b"/api/recipes/a%20b"


@pytest.mark.asyncio
async def test_home_renders_recent_cards(api):
    ui = CookbookUI(api, recent=2)
    for name in ("Oldest Stew", "Grandma's Pie", "Tom & Jerry Cake"):
        await api.create_recipe(dict(PIE, name=name))

    page = await ui.home()
    assert page.ok
    assert page.html.count('class="recipe-card"') == 2
    assert "Tom &amp; Jerry Cake" in page.html
    assert "Grandma&#39;s Pie" in page.html
    assert "Oldest Stew" not in page.html


@pytest.mark.asyncio
async def test_home_empty_state(api):
    page = await CookbookUI(api).home()
    assert "No recipes in the collection yet" in page.html


@pytest.mark.asyncio
async def test_errors_collapse_to_generic_messages():
    ui = CookbookUI(failing_client(status=404))

    page = await ui.home()
    assert not page.ok
    assert "Unable to load recipes. Please try again later." in page.html

    page = await ui.browse()
    assert "Unable to load recipes. Please try again later." in page.html

    page = await ui.open_recipe("abc")
    assert "Unable to load recipe details." in page.html

    page = await ui.submit_recipe({
        "name": "Apple Pie",
        "category": "desserts",
        "ingredients": "apples",
        "instructions": "Bake the pie for an hour.",
    })
    assert "Failed to save recipe. Please try again." in page.html
    assert page.notification.kind == "error"


@pytest.mark.asyncio
async def test_browse_search_and_clear(api):
    ui = CookbookUI(api, debounce=0.02)
    await api.create_recipe(dict(PIE, name="Pie One"))
    await api.create_recipe(dict(PIE, name="Stew", instructions="Simmer with a bay leaf until tender."))

    page = await ui.browse()
    assert page.count_text == "Showing all 2 recipes"

    ui.on_search_input("bay")
    ui.on_search_input("bay leaf")
    await asyncio.sleep(0.06)
    assert ui.state.search_term == "bay leaf"
    assert ui.listing.count_text == "Showing 1 of 2 recipes"
    assert "Stew" in ui.listing.html

    page = ui.search("nothing matches this")
    assert "No recipes match your search." in page.html

    page = ui.clear_search()
    assert page.count_text == "Showing all 2 recipes"


@pytest.mark.asyncio
async def test_browse_deep_link_opens_modal(api):
    created = await api.create_recipe(PIE)
    ui = CookbookUI(api)

    await ui.browse(recipe_id=created["id"])
    assert ui.state.current_recipe_id == created["id"]
    assert "Grandma&#39;s Pie" in ui.modal.html
    assert "No comments yet" in ui.modal.comments_html

    ui.close_recipe()
    assert ui.state.current_recipe_id is None
    assert ui.modal is None


@pytest.mark.asyncio
async def test_submit_recipe_and_comment(api):
    ui = CookbookUI(api)

    page = await ui.submit_recipe({"name": "Pi"})
    assert not page.ok
    assert "at least 3 characters" in page.html

    page = await ui.submit_recipe({
        "name": "  Apple Pie ",
        "category": "desserts",
        "ingredients": "apples\nsugar",
        "instructions": "Bake the pie for an hour.",
    })
    assert page.ok
    assert page.notification.message == "Recipe added successfully!"

    recipe = (await api.fetch_all())[0]
    assert recipe["name"] == "Apple Pie"

    await ui.open_recipe(recipe["id"])
    page = await ui.submit_comment("  ", "Hello")
    assert page.notification.message == "Please fill in all fields"

    page = await ui.submit_comment("Ann", "<b>Lovely</b>")
    assert page.ok
    assert page.notification.message == "Comment added successfully!"
    assert "Ann" in ui.modal.comments_html
    assert "<b>" not in ui.modal.comments_html


@pytest.mark.asyncio
async def test_comment_without_open_recipe_does_nothing(api):
    page = await CookbookUI(api).submit_comment("Ann", "Hi")
    assert not page.ok
    assert page.notification is None
