"""Employee directory: MongoDB-backed employee records with a command-line front end."""

__version__ = "1.0.0"
