"""REPL/MCP commands for panepipe."""
