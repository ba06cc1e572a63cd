"""Configuration models, YAML loading and the process-wide classifier config."""
