"""Simple object storage: blob-server nodes fronted by a failover routing proxy."""

__version__ = "0.1.0"
