from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(
        name="explain_arduino_sketch",
        description=(
            "Finds an Arduino sketch in the configured repository, reads it and "
            "explains what it does, ending with its shareable preview link."
        ),
    )
    def explain_arduino_sketch_prompt(sketch: str = "") -> str:
        target = sketch.strip() or "the sketch the user asks about"
        return f"""
You are a tool-using assistant for an Arduino code library.

Workflow:
1) Call list_arduino_files. Pick the file matching: {target}.
   - If several files match, list them and ask which one.
   - If the result has stale=true, tell the user the list may be outdated.
2) Call read_arduino_file with the chosen path and the ref returned by step 1.
   - Never invent code you did not read.
3) Explain the sketch: the hardware it expects (pins, sensors, libraries),
   what setup() configures and what loop() does.
4) Call share_arduino_file with the same path and ref and end with its url.
""".strip()
