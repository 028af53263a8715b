import pytest

from core.models import FileDescriptor, Listing
from sources.github_source import GitHubSource


class FakeGitHubClient:
    def __init__(self, content=""):
        self._content = content
        self.calls = []

    async def read_raw(self, coordinate, path, *, max_chars):
        self.calls.append(("read", coordinate, path, max_chars))
        return self._content


class FakeResolver:
    def __init__(self, files, ref=None):
        self._files = files
        self._ref = ref
        self.calls = []

    async def resolve(self, context):
        self.calls.append(context)
        return Listing(context=context, files=tuple(self._files), origin="network")

    async def session_ref(self, context):
        self.calls.append(("ref", context))
        return self._ref or context.ref


@pytest.mark.asyncio
async def test_github_source_lists_through_resolver(context):
    resolver = FakeResolver([FileDescriptor(path="a.ino"), FileDescriptor(path="b/c.h")])
    src = GitHubSource(client=FakeGitHubClient(), resolver=resolver, context=context)

    out = await src.list_files()

    assert [f.path for f in out] == ["a.ino", "b/c.h"]
    assert resolver.calls == [context]


@pytest.mark.asyncio
async def test_github_source_read_file_passthrough(context):
    fake = FakeGitHubClient(content="void loop() {}")
    src = GitHubSource(client=fake, resolver=FakeResolver([]), context=context.with_ref("dev"))

    out = await src.read_file(path="Blink/Blink.ino", max_chars=10)

    assert out == "void loop() {}"
    assert fake.calls == [("read", context.coordinate.with_ref("dev"), "Blink/Blink.ino", 10)]


@pytest.mark.asyncio
async def test_github_source_read_file_uses_session_ref(context):
    fake = FakeGitHubClient(content="x")
    resolver = FakeResolver([], ref="release")
    ctx = context.with_ref("main")
    src = GitHubSource(client=fake, resolver=resolver, context=ctx)

    await src.read_file(path="a.ino", max_chars=100)

    assert resolver.calls == [("ref", ctx)]
    assert fake.calls[-1][1].ref == "release"
