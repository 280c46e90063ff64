"""Input schemas for MCP tools"""
