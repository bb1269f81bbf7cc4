"""Command line interface for landscape-simple."""
