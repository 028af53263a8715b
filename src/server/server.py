"""Server bootstrap for the Arduino code manager MCP service.

Creates the FastMCP instance, wires one GitHub client, key-value store and
listing resolver into every tool, registers resources and prompts, and
starts the MCP server (stdio transport).
"""

from mcp.server.fastmcp import FastMCP

from logging_conf import setup_logging
from tools.session import build_github_client, build_resolver, build_store

from tools.build_manifest import register as register_build_manifest
from tools.download_file import register as register_download_file
from tools.list_files import register as register_list_files
from tools.read_file import register as register_read_file
from tools.share_file import register as register_share_file
from tools.theme import register as register_theme

from resources.manifest_format import register_resources
from prompts.sketch_prompt import register_prompts

mcp = FastMCP("arduino-code-manager")


def register_tools() -> None:
    github_client = build_github_client()
    store = build_store()
    resolver = build_resolver(github_client, store)

    register_list_files(mcp, github_client=github_client, resolver=resolver)
    register_read_file(mcp, github_client=github_client, resolver=resolver)
    register_download_file(mcp, github_client=github_client, resolver=resolver)
    register_share_file(mcp, github_client=github_client, resolver=resolver)
    register_build_manifest(mcp)
    register_theme(mcp, store=store)


def register_all() -> None:
    register_tools()
    register_resources(mcp)
    register_prompts(mcp)


register_all()


def main() -> None:
    setup_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
