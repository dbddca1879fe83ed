"""
Configuration-related constants and resource limits.
"""

# Maximum config file size (1MB); runkit configs are a handful of keys
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

DEFAULT_CONFIG_FILENAME = "runkit.yaml"

ENV_PREFIX = "RUNKIT_"
