from mcp.server.fastmcp import FastMCP


MANIFEST_FORMAT = """\
files.json - static listing of the Arduino files published with the site.

Served next to index.html (<origin><base-path>files.json) and preferred over
the GitHub API because it has no rate limit.

{
  "branch": "main",                 // optional, overrides the ref for the session
  "files": [
    "LedBlink/LedBlink.ino",        // bare path
    {"path": "Sensors/Temp.cpp"}    // or an object with a path
  ]
}

Only .ino, .cpp and .h paths are listed; anything else is ignored.
Generate it with the build_manifest tool.
"""


def register_resources(mcp: FastMCP) -> None:
    """
    Register the manifest format description for the MCP server.
    """

    @mcp.resource(
        "arduino://manifest/format",
        mime_type="text/plain",
        description="Format of the static files.json manifest",
    )
    def manifest_format() -> str:
        return MANIFEST_FORMAT
