# SPDX-License-Identifier: MIT
"""sora-relay MCP server.

Advertises the tool contracts and forwards every tool call to the
dispatcher. Transport is stdio.
"""

from typing import Any

import anyio
import mcp.types as types
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import logger
from .contracts import ToolContract
from .dispatcher import ToolResult, build_dispatcher

server: Server = Server("sora-relay")
dispatcher = build_dispatcher()


def to_mcp_tool(contract: ToolContract) -> types.Tool:
    return types.Tool(name=contract.name, description=contract.description, inputSchema=contract.input_schema())


def to_call_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    return [to_mcp_tool(contract) for contract in dispatcher.list_tools()]


# Arguments are validated by the dispatcher against the same contracts
@server.call_tool(validate_input=False)
async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
    result = await dispatcher.call(name, arguments)
    return to_call_result(result)


async def serve() -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server over stdio.

    The API key is read when a tool is called, so the server starts even
    when OPENAI_API_KEY is missing.
    """
    load_dotenv()  # Load environment variables at runtime
    logger.info("Starting sora-relay MCP server over stdio")
    anyio.run(serve)


if __name__ == "__main__":
    main()
