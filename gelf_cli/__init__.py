"""
gelf-cli - Command-line interface for gelf_logger.

Send a one-off GELF message, or print the GELF JSON a message would produce.

Usage:
    gelf-cli --host graylog.local send "Deploy finished" --level notice --field version=1.4.2
    gelf-cli --config config/gelf.yaml send "Backup failed" --level error
    gelf-cli --hostname web-01 encode "Hello" --field facility=billing
"""

__version__ = "1.0.0"
