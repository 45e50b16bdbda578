"""panepipe entry point.

Runs the agent daemon, the MCP server or the interactive REPL depending on
command line arguments.
"""

import asyncio
import logging
import sys

from .config import get_config_manager


def main():
    """Run panepipe based on command line arguments.

    - daemon: Runs the pane agent daemon
    - --mcp: Runs as MCP server for integration
    - otherwise: Runs as interactive REPL
    """
    logging.basicConfig(
        level=get_config_manager().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    if "daemon" in sys.argv[1:]:
        from .daemon import PanePipeDaemon

        asyncio.run(PanePipeDaemon().run())
        return

    from .app import app

    if "--mcp" in sys.argv:
        app.mcp.run()
    else:
        app.run(title="panepipe - Terminal Pane Agent")


if __name__ == "__main__":
    main()
