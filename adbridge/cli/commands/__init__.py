"""
adbridge.cli.commands

One module per subcommand; each exposes ``register(sub)`` and binds ``_fn``.
"""
__all__ = [
    "validate_cmd",
    "distribute_cmd",
    "status_cmd",
    "insights_cmd",
]
