import pytest

from core.models import NotFound, RepoCoordinate, SessionContext, SiteContext


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.resources = {}
        self.prompts = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def resource(self, uri: str, **_kwargs):
        def _decorator(fn):
            self.resources[uri] = fn
            return fn
        return _decorator

    def prompt(self, *, name: str, **_kwargs):
        def _decorator(fn):
            self.prompts[name] = fn
            return fn
        return _decorator


class FakeGitHub:
    """TreeFetcher fake: returns queued tree results and records calls."""

    def __init__(self, results=None, default_branch="main", branch_error=None):
        self._results = list(results or [])
        self._default_branch = default_branch
        self._branch_error = branch_error
        self.tree_calls = []
        self.branch_calls = []

    async def get_default_branch(self, coordinate):
        self.branch_calls.append(coordinate)
        if self._branch_error is not None:
            raise self._branch_error
        return self._default_branch

    async def fetch_tree(self, coordinate, *, etag=None):
        self.tree_calls.append((coordinate, etag))
        if not self._results:
            raise AssertionError("Unexpected tree fetch")
        return self._results.pop(0)


class FakeManifest:
    def __init__(self, result=None):
        self._result = result if result is not None else NotFound()
        self.calls = []

    async def load(self, site):
        self.calls.append(site)
        return self._result


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def site():
    return SiteContext(origin="https://x.io", base_path="/repo/")


@pytest.fixture
def context(site):
    return SessionContext(coordinate=RepoCoordinate(owner="octo", name="sketches", ref="main"), site=site)


@pytest.fixture
def make_github():
    return FakeGitHub


@pytest.fixture
def make_manifest():
    return FakeManifest


@pytest.fixture
def configured_repo(monkeypatch):
    """Point the tools at octo/sketches published on GitHub Pages."""
    import tools.session as session_mod

    monkeypatch.setattr(session_mod, "ARDUINO_OWNER", "octo")
    monkeypatch.setattr(session_mod, "ARDUINO_REPO", "sketches")
    monkeypatch.setattr(session_mod, "ARDUINO_BRANCH", "")
    monkeypatch.setattr(session_mod, "SITE_URL", "https://octo.github.io/sketches/")
