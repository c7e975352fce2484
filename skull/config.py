"""
Configuration - Environment settings.

SKULL_LOG_LEVEL  Log level used by the CLI (default WARNING)
SKULL_SEED       Seed for games created without an explicit rng (default unset)
"""

import os

# Environment configuration
SKULL_LOG_LEVEL = os.getenv("SKULL_LOG_LEVEL", "WARNING").upper()
SKULL_SEED = os.getenv("SKULL_SEED", None)


def default_seed():
    """
    Seed for a new game's random source.

    Returns None (OS entropy) when SKULL_SEED is unset or blank.
    """
    if SKULL_SEED is None or not SKULL_SEED.strip():
        return None
    try:
        return int(SKULL_SEED)
    except ValueError:
        raise ValueError(f"SKULL_SEED must be an integer, got {SKULL_SEED!r}") from None
