"""
Test utilities package for Chronoshift tests.

### test_helpers.py
- `create_temp_config_file()`: Context manager for temporary YAML config files
"""
