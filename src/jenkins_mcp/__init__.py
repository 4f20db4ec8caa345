"""
Jenkins MCP gateway: exposes Jenkins job control as MCP tools.
"""

__version__ = "1.0.0"
