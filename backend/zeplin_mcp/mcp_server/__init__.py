"""FastMCP server exposing Zeplin design data as tools."""
