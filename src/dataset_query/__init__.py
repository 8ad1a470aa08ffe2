"""Dataset Query API - schema inference and queries over a remote JSON dataset."""

__version__ = "0.1.0"
