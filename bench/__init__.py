"""Benchmark dataset generation and file-driven timing."""
