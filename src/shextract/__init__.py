"""shextract - flatten shell scripts into the commands they run."""

__version__ = "0.1.0"
