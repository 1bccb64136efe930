"""Shared fixtures: canned upstream payloads and a mock HTTP transport."""

import httpx
import pytest
import pytest_asyncio

from pkgcompare.config import CompareConfig
from pkgcompare.models import PackageRecord


def registry_document(name, version, dependencies=None, peer_dependencies=None, **manifest):
    return {
        "name": name,
        "dist-tags": {"latest": version},
        "versions": {
            version: {
                "name": name,
                "version": version,
                "dependencies": dependencies or {},
                "peerDependencies": peer_dependencies or {},
                **manifest,
            }
        },
        "time": {
            "created": "2012-04-23T16:37:11.912Z",
            "modified": "2024-05-01T10:00:00.000Z",
        },
    }


REGISTRY = {
    "lodash": registry_document(
        "lodash", "4.17.21",
        description="Lodash modular utilities.",
        license="MIT",
        author={"name": "John-David Dalton", "email": "john.david.dalton@gmail.com"},
        repository={"type": "git", "url": "git+https://github.com/lodash/lodash.git"},
        keywords=["modules", "stdlib", "util"],
        maintainers=[{"name": "jdalton", "email": "john.david.dalton@gmail.com"}],
    ),
    "axios": registry_document(
        "axios", "1.7.2",
        dependencies={"follow-redirects": "^1.15.6", "form-data": "^4.0.0", "proxy-from-env": "^1.1.0"},
        description="Promise based HTTP client for the browser and node.js",
        license="MIT",
        author="Matt Zabriskie",
        repository="https://github.com/axios/axios",
        keywords=["xhr", "http", "ajax", "promise", "node", "browser", "fetch"],
    ),
}

DOWNLOADS = {
    "lodash": {"last-week": 50_000_000, "last-month": 210_000_000, "days": [5, 7, 3]},
    "axios": {"last-week": 45_000_000, "last-month": 190_000_000, "days": [10, 20]},
}

SIZES = {
    "lodash@4.17.21": {"size": 71_000, "gzip": 25_000, "dependencySizes": [{"name": "lodash", "approximateSize": 71_000}]},
    "axios@1.7.2": {
        "size": 30_000,
        "gzip": 11_000,
        "dependencySizes": [{"name": "axios", "approximateSize": 1000}, {"name": "follow-redirects", "approximateSize": 2500}],
    },
}


class UpstreamStub:
    """Routes requests for the three providers to canned payloads and records them."""

    def __init__(self, registry=None, downloads=None, sizes=None):
        self.registry = dict(REGISTRY if registry is None else registry)
        self.downloads = dict(DOWNLOADS if downloads is None else downloads)
        self.sizes = dict(SIZES if sizes is None else sizes)
        self.failing: set[str] = set()
        self.requests: list[httpx.Request] = []

    def paths(self, host=None):
        return [r.url.path for r in self.requests if host is None or r.url.host == host]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path

        if host == "registry.npmjs.org":
            name = path.lstrip("/")
            if name in self.failing:
                return httpx.Response(500, text="upstream down")
            if name not in self.registry:
                return httpx.Response(404, json={"error": "Not found"})
            return httpx.Response(200, json=self.registry[name])

        if host == "api.npmjs.org":
            parts = path.split("/")
            kind, period, name = parts[2], parts[3], "/".join(parts[4:])
            if name in self.failing or name not in self.downloads:
                return httpx.Response(404, json={"error": f"package {name} not found"})
            stats = self.downloads[name]
            if kind == "point":
                return httpx.Response(200, json={"downloads": stats[period], "package": name})
            days = [{"downloads": n, "day": f"2024-01-0{i + 1}"} for i, n in enumerate(stats["days"])]
            return httpx.Response(200, json={"downloads": days, "package": name})

        if host == "bundlephobia.com":
            spec = request.url.params["package"]
            if spec.rsplit("@", 1)[0] in self.failing or spec not in self.sizes:
                return httpx.Response(500, json={"error": {"code": "BuildError"}})
            return httpx.Response(200, json=self.sizes[spec])

        return httpx.Response(404)


@pytest.fixture
def config():
    return CompareConfig()


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest_asyncio.fixture
async def http_client(upstream):
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    yield client
    await client.aclose()


def make_record(name, version="1.0.0", **fields):
    return PackageRecord(name=name, version=version, **fields)
