"""Run the project tracker MCP server over stdio."""

from project_tracker.server import main

if __name__ == "__main__":
    main()
