"""In-memory fungible-token program: mints, token accounts, multisig owners and their instructions."""

__version__ = "0.1.0"

__all__ = [
    "entrypoint",
    "errors",
    "handlers",
    "instruction",
    "pubkey",
    "runtime",
    "shared",
    "state",
    "token_ops",
    "validation",
]