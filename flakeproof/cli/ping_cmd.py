# flakeproof/cli/ping_cmd.py
"""
Health check through the full engine path
"""

import asyncio
from typing import Any, Dict

from flakeproof.api import ToolEngine
from flakeproof.config import load_config
from flakeproof.core.result import ToolResult
from flakeproof.utils.log import configure_logging


async def _ping(args) -> ToolResult:
    config = load_config(args.config)
    configure_logging(config.log_level)

    payload: Dict[str, Any] = {}
    if args.message is not None:
        payload["message"] = args.message

    async with ToolEngine(config) as engine:
        return await engine.call("tool.ping", payload)


def run_ping(args):
    """Run tool.ping and print the result envelope"""
    result = asyncio.run(_ping(args))
    print(result.to_json())
    return 0 if result.ok else 1
