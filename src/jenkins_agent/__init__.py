"""
Jenkins agent: a REPL that turns prompts into Jenkins MCP tool calls.
"""

__version__ = "0.1.0"
