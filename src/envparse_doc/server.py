"""MCP server for envparse-doc."""

import asyncio
import json

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import ScanConfig
from .render import OUTPUTS
from .tools.scan_sources import scan_env
from .tools.scan_dependencies import scan_dependencies
from .tools.render_env_docs import render_env_docs


# Create server
server = Server("envparse-doc")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="scan_env",
            description="Scan a source file or folder for EnvParse accessor calls. Returns each environment variable with its kind, arguments and documentation comment.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to a source file or folder (absolute or relative, supports ~ for home directory)"
                    },
                    "sort": {
                        "type": "boolean",
                        "description": "Order variables alphabetically",
                        "default": True
                    },
                    "extensions": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "File extensions scanned in folders (e.g., ['.js', '.ts']). Defaults to ['.js']."
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="scan_dependencies",
            description="Walk an installed package store and scan every package that depends on the EnvParse library. Packages without variables are left out.",
            inputSchema={
                "type": "object",
                "properties": {
                    "store": {
                        "type": "string",
                        "description": "Package store directory",
                        "default": "node_modules"
                    },
                    "sort": {
                        "type": "boolean",
                        "description": "Order variables alphabetically",
                        "default": True
                    }
                }
            }
        ),
        Tool(
            name="render_env_docs",
            description="Render environment variable documentation as a Markdown table or JSON for a path, optionally including dependency packages.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to a source file or folder"
                    },
                    "output": {
                        "type": "string",
                        "description": "Output format",
                        "enum": list(OUTPUTS),
                        "default": "md"
                    },
                    "sort": {
                        "type": "boolean",
                        "description": "Order variables alphabetically",
                        "default": True
                    },
                    "dependency": {
                        "type": "boolean",
                        "description": "Also document packages in the store that use EnvParse",
                        "default": False
                    },
                    "store": {
                        "type": "string",
                        "description": "Package store directory (used with dependency)"
                    }
                },
                "required": ["path"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    config = ScanConfig()

    try:
        if name == "scan_env":
            result = scan_env(
                path=arguments["path"],
                sort=arguments.get("sort", True),
                extensions=arguments.get("extensions"),
                namespace=config.namespace,
            )
        elif name == "scan_dependencies":
            result = scan_dependencies(
                store=arguments.get("store", config.store),
                sort=arguments.get("sort", True),
                package=config.package,
                namespace=config.namespace,
            )
        elif name == "render_env_docs":
            result = render_env_docs(
                path=arguments["path"],
                output=arguments.get("output", "md"),
                sort=arguments.get("sort", True),
                dependency=arguments.get("dependency", False),
                store=arguments.get("store"),
                config=config,
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
