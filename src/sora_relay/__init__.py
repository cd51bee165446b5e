# SPDX-License-Identifier: MIT
"""sora-relay: MCP tools for OpenAI Sora video generation."""

__version__ = "0.1.0"
