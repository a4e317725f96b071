"""Runnable demonstrations of processes, scheduling, threads, synchronisation, UDP and persistence."""

__version__ = "0.1.0"