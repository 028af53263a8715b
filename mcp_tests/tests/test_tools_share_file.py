import pytest

from core.cache import ListingCache, MemoryStore
from core.errors import ValidationError
from core.urls import preview_url
from core.models import FileDescriptor, Found, Manifest, SiteContext
from core.resolver import ListingResolver
from tools import list_files as list_files_tool
from tools import share_file as share_file_tool


def _register(dummy_mcp, github, manifest):
    resolver = ListingResolver(github=github, cache=ListingCache(MemoryStore()), manifest=manifest)
    share_file_tool.register(dummy_mcp, github_client=github, resolver=resolver)
    return dummy_mcp.tools["share_arduino_file"], resolver


@pytest.mark.asyncio
async def test_share_tool_link_qr_and_view_url_are_identical(dummy_mcp, configured_repo, make_github, make_manifest):
    fn, _ = _register(dummy_mcp, make_github(), make_manifest())

    out = await fn(path="A/b c.ino", ref="main")

    view = preview_url("A/b c.ino", "main", SiteContext(origin="https://octo.github.io", base_path="/sketches/"))
    assert out["url"] == "https://octo.github.io/sketches/file.html?path=A%2Fb%20c.ino&ref=main"
    assert out["url"] == out["qr_payload"] == view
    assert out["title"] == "Arduino Project: b c.ino"


@pytest.mark.asyncio
async def test_share_tool_uses_manifest_branch_like_listing(dummy_mcp, configured_repo, make_github, make_manifest):
    manifest = Manifest(files=(FileDescriptor(path="A/b.ino"),), branch="dev")
    github = make_github()
    fn, resolver = _register(dummy_mcp, github, make_manifest(Found(manifest)))
    list_files_tool.register(dummy_mcp, github_client=github, resolver=resolver)

    listed = await dummy_mcp.tools["list_arduino_files"]()
    shared = await fn(path="A/b.ino")

    assert shared["url"] == listed["files"][0]["preview_url"]
    assert shared["url"].endswith("path=A%2Fb.ino&ref=dev")
    assert github.branch_calls == []


@pytest.mark.asyncio
async def test_share_tool_defaults_to_repository_default_branch(dummy_mcp, configured_repo, make_github, make_manifest):
    fn, _ = _register(dummy_mcp, make_github(default_branch="trunk"), make_manifest())

    out = await fn(path="Blink.ino")

    assert out["url"].endswith("path=Blink.ino&ref=trunk")


@pytest.mark.asyncio
async def test_share_tool_requires_path(dummy_mcp, configured_repo, make_github, make_manifest):
    fn, _ = _register(dummy_mcp, make_github(), make_manifest())

    with pytest.raises(ValidationError):
        await fn(path="  ")
