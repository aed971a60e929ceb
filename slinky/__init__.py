"""Helpers for controllers that manage Slurm clusters on Kubernetes."""

__version__ = "0.4.0"