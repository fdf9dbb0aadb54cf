"""
CLI Module - typer application.

Commands:
- learn: Run an interactive learning cycle
- config: Show effective configuration
"""
