"""
Code shared by the Jenkins MCP gateway and the Jenkins agent bridge.
"""
