from prompts.sketch_prompt import register_prompts
from resources.manifest_format import register_resources


def test_manifest_format_resource(dummy_mcp):
    register_resources(dummy_mcp)

    text = dummy_mcp.resources["arduino://manifest/format"]()

    assert "files.json" in text
    assert ".ino" in text


def test_explain_prompt_names_the_tools(dummy_mcp):
    register_prompts(dummy_mcp)

    text = dummy_mcp.prompts["explain_arduino_sketch"](sketch="LedBlink")

    assert "LedBlink" in text
    for tool in ("list_arduino_files", "read_arduino_file", "share_arduino_file"):
        assert tool in text
