import pytest

from clients.github import TreeResponse
from core.cache import ListingCache, MemoryStore
from core.errors import ConfigurationError, ListingUnavailableError
from core.models import Failed, FileDescriptor, Found, Manifest
from core.resolver import ListingResolver
from tools import list_files as list_files_tool


TREE = {
    "tree": [
        {"path": "Sensors/Temp.cpp", "type": "blob", "sha": "s2", "size": 20, "url": "u2"},
        {"path": "Blink.ino", "type": "blob", "sha": "s1", "size": 10, "url": "u1"},
        {"path": "docs/readme.md", "type": "blob"},
    ]
}


def _register(dummy_mcp, github, manifest):
    resolver = ListingResolver(github=github, cache=ListingCache(MemoryStore()), manifest=manifest)
    list_files_tool.register(dummy_mcp, github_client=github, resolver=resolver)
    return dummy_mcp.tools["list_arduino_files"]


@pytest.mark.asyncio
async def test_list_tool_returns_files_with_preview_urls(dummy_mcp, configured_repo, make_github, make_manifest):
    github = make_github([Found(TreeResponse(data=TREE, etag='"e"'))], default_branch="main")
    fn = _register(dummy_mcp, github, make_manifest())

    out = await fn()

    assert out["owner"] == "octo"
    assert out["repo"] == "sketches"
    assert out["ref"] == "main"
    assert out["origin"] == "network"
    assert out["stale"] is False
    assert out["count"] == 2
    assert out["files"] == [
        {
            "path": "Blink.ino",
            "name": "Blink.ino",
            "chapter": "Other",
            "sha": "s1",
            "size": 10,
            "url": "u1",
            "preview_url": "https://octo.github.io/sketches/file.html?path=Blink.ino&ref=main",
        },
        {
            "path": "Sensors/Temp.cpp",
            "name": "Temp.cpp",
            "chapter": "Sensors",
            "sha": "s2",
            "size": 20,
            "url": "u2",
            "preview_url": "https://octo.github.io/sketches/file.html?path=Sensors%2FTemp.cpp&ref=main",
        },
    ]


@pytest.mark.asyncio
async def test_list_tool_manifest_branch_drives_preview_urls(dummy_mcp, configured_repo, make_github, make_manifest):
    manifest = Manifest(files=(FileDescriptor(path="a/A.ino"),), branch="release")
    fn = _register(dummy_mcp, make_github(), make_manifest(Found(manifest)))

    out = await fn(ref="dev")

    assert out["ref"] == "release"
    assert out["origin"] == "manifest"
    assert out["files"][0]["preview_url"].endswith("path=a%2FA.ino&ref=release")
    assert "sha" not in out["files"][0]


@pytest.mark.asyncio
async def test_list_tool_surfaces_listing_failure(dummy_mcp, configured_repo, make_github, make_manifest):
    github = make_github([Failed(reason="rate limit", status_code=403, rate_limited=True)])
    fn = _register(dummy_mcp, github, make_manifest())

    with pytest.raises(ListingUnavailableError):
        await fn(ref="main")


@pytest.mark.asyncio
async def test_list_tool_without_repository_is_configuration_error(monkeypatch, dummy_mcp, make_github, make_manifest):
    import tools.session as session_mod

    monkeypatch.setattr(session_mod, "ARDUINO_OWNER", "")
    monkeypatch.setattr(session_mod, "ARDUINO_REPO", "")
    monkeypatch.setattr(session_mod, "SITE_URL", "https://example.com/")
    fn = _register(dummy_mcp, make_github(), make_manifest())

    with pytest.raises(ConfigurationError):
        await fn()
