"""Command line interface for running sync tables and issue actions."""
