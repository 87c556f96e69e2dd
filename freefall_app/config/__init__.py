"""
Configuration module.

Default parameters, YAML file loading with override precedence, and
validation for the stopwatch, its history storage and logging.
"""
