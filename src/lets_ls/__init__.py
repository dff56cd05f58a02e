"""
lets-ls - language server for lets.yaml task runner configuration

This package provides:
- Completion of command names inside `depends` lists
- Go-to-definition for files listed under `mixins`
- A typer CLI to serve over stdio and inspect documents
"""

__version__ = "0.1.0"
