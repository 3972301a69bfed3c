"""Command line interface for NOM Tools."""
