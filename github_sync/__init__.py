"""Paginated GitHub sync tables for repositories, pull requests and issues."""

__version__ = "0.1.0"
