"""
Use cases — one entry point per CLI command.

Each returns a result dataclass with ``to_dict()``; none of them print
or exit. Presentation and exit codes belong to the CLI layer.
"""
