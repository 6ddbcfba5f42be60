"""Artiforge CLI: Typer-based command-line interface.

Provides the ``artiforge`` command with subcommands for writing checksum
manifests, digesting single files, and publishing container images.

All output uses Rich for formatted terminal display.
"""
