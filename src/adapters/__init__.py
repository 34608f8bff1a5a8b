"""Adapters connecting the dmgate core to files and host pipelines."""
