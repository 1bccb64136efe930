import asyncio

import httpx
import pytest

from pkgcompare.notifications import Notifier
from pkgcompare.packages.npm_client import NPMClient
from pkgcompare.packages.search import SuggestionSearch
from pkgcompare.selection import PackageSelector, SelectionManager

from .conftest import make_record, registry_document


class PagedSearch:
    """Search endpoint that can be told to fail."""

    def __init__(self, total_results):
        self.total_results = total_results
        self.fail = False
        self.calls = 0

    def __call__(self, request):
        self.calls += 1
        if self.fail:
            return httpx.Response(500)
        start = int(request.url.params["from"])
        query = request.url.params["text"]
        names = [f"{query}-{i}" for i in range(start, min(start + 20, self.total_results))]
        return httpx.Response(200, json={"objects": [{"package": {"name": n}} for n in names]})


@pytest.fixture
def notifier():
    return Notifier()


def test_add_then_remove_restores_selection():
    selection = SelectionManager()
    selection.add(make_record("react"))
    selection.add(make_record("vue"))
    before = selection.names

    selection.add(make_record("svelte"))
    selection.remove("svelte")

    assert selection.names == before


def test_remove_preserves_order():
    selection = SelectionManager()
    for name in ["a-pkg", "b-pkg", "c-pkg", "d-pkg"]:
        selection.add(make_record(name))

    selection.remove("b-pkg")

    assert selection.names == ["a-pkg", "c-pkg", "d-pkg"]


def test_duplicate_add_is_noop():
    selection = SelectionManager()
    notified = []
    selection.subscribe(notified.append)

    assert selection.add(make_record("react")) is True
    assert selection.add(make_record("react", version="99.0.0")) is False

    assert len(selection) == 1
    assert selection.get("react").version == "1.0.0"
    assert len(notified) == 1


def test_listeners_receive_snapshots():
    selection = SelectionManager()
    snapshots = []
    selection.subscribe(snapshots.append)

    selection.add(make_record("react"))
    selection.add(make_record("vue"))
    selection.remove("react")
    selection.remove("missing")

    assert [[r.name for r in s] for s in snapshots] == [["react"], ["react", "vue"], ["vue"]]

    selection.unsubscribe(snapshots.append)
    selection.add(make_record("svelte"))
    assert len(snapshots) == 3


@pytest.mark.asyncio
async def test_search_pages_append_and_page_one_replaces(config, notifier):
    endpoint = PagedSearch(45)
    async with httpx.AsyncClient(transport=httpx.MockTransport(endpoint)) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)

        await search.set_query("react")
        assert len(search.suggestions) == 20
        assert search.has_more is True

        assert await search.load_more() is True
        assert len(search.suggestions) == 40
        assert search.suggestions[:2] == ["react-0", "react-1"]
        assert search.page == 2

        assert await search.load_more() is True
        assert len(search.suggestions) == 45
        assert search.has_more is False

        assert await search.load_more() is False
        assert endpoint.calls == 3

        await search.set_query("redux")
        assert search.suggestions == [f"redux-{i}" for i in range(20)]
        assert search.page == 1
        assert search.loading is False


@pytest.mark.asyncio
async def test_short_query_clears_without_request(config, notifier):
    endpoint = PagedSearch(45)
    async with httpx.AsyncClient(transport=httpx.MockTransport(endpoint)) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)
        await search.set_query("react")

        await search.set_query("re")

        assert search.suggestions == []
        assert await search.load_more() is False
        assert endpoint.calls == 1


@pytest.mark.asyncio
async def test_search_failure_keeps_suggestions(config, notifier):
    endpoint = PagedSearch(45)
    async with httpx.AsyncClient(transport=httpx.MockTransport(endpoint)) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)
        await search.set_query("react")

        endpoint.fail = True
        await search.load_more()

        assert len(search.suggestions) == 20
        assert search.page == 1
        assert search.has_more is True
        assert search.loading is False
        assert [n.message for n in notifier.drain()] == ["Failed to fetch package suggestions"]


@pytest.mark.asyncio
async def test_selector_adds_fetched_package(config, http_client, notifier):
    selection = SelectionManager()
    selector = PackageSelector(selection, NPMClient(config, http_client), notifier)
    selector.search.query = "loda"
    selector.search.suggestions = ["lodash", "lodash-es"]

    record = await selector.select("lodash")

    assert record.name == "lodash"
    assert selection.names == ["lodash"]
    assert selector.search.suggestions == []
    assert selector.search.query == ""


@pytest.mark.asyncio
async def test_selector_failure_notifies_and_skips(config, http_client, notifier):
    selection = SelectionManager()
    selector = PackageSelector(selection, NPMClient(config, http_client), notifier)

    assert await selector.select("no-such-package") is None

    assert len(selection) == 0
    notification = notifier.drain()[0]
    assert notification.message == "Failed to fetch package no-such-package"
    assert notification.package == "no-such-package"


@pytest.mark.asyncio
async def test_search_is_loading_while_request_runs(config, notifier):
    release = asyncio.Event()
    endpoint = PagedSearch(45)

    async def handler(request):
        await release.wait()
        return endpoint(request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)

        pending = asyncio.create_task(search.set_query("react"))
        while not search.loading:
            await asyncio.sleep(0)

        assert search.loading is True
        assert await search.load_more() is False

        release.set()
        await pending

    assert search.loading is False
    assert len(search.suggestions) == 20


@pytest.mark.asyncio
async def test_late_response_for_old_query_is_dropped(config, notifier):
    release_old = asyncio.Event()
    endpoint = PagedSearch(45)

    async def handler(request):
        if request.url.params["text"] == "reac":
            await release_old.wait()
        return endpoint(request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)

        old = asyncio.create_task(search.set_query("reac"))
        while not search.loading:
            await asyncio.sleep(0)

        await search.set_query("redux")
        assert search.suggestions[0] == "redux-0"
        assert search.loading is False

        release_old.set()
        await old

    assert search.suggestions[0] == "redux-0"
    assert search.query == "redux"
    assert search.loading is False


@pytest.mark.asyncio
async def test_malformed_search_response_notifies(config, notifier):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"objects": [None]}))
    async with httpx.AsyncClient(transport=transport) as http_client:
        search = SuggestionSearch(NPMClient(config, http_client), notifier)
        search.suggestions = ["kept"]

        await search.set_query("react")

    assert search.suggestions == ["kept"]
    assert [n.message for n in notifier.drain()] == ["Failed to fetch package suggestions"]


@pytest.mark.asyncio
async def test_selector_malformed_registry_document_notifies(config, notifier):
    document = {"dist-tags": ["latest"], "versions": {}}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=document))
    async with httpx.AsyncClient(transport=transport) as http_client:
        selection = SelectionManager()
        selector = PackageSelector(selection, NPMClient(config, http_client), notifier)

        assert await selector.select("weird") is None

    assert len(selection) == 0
    assert [n.message for n in notifier.drain()] == ["Failed to fetch package weird"]


@pytest.mark.asyncio
async def test_selecting_an_already_selected_package_is_noop(config, notifier):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=registry_document("react", "18.3.1"))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        selection = SelectionManager()
        selector = PackageSelector(selection, NPMClient(config, http_client), notifier)

        assert (await selector.select("react")).version == "18.3.1"
        assert await selector.select("react") is None

    assert len(calls) == 1
    assert selection.names == ["react"]
