"""Outer interfaces: terminal CLI and REST API."""
