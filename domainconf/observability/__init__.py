"""Observability: structured logging, logging sink wiring, metrics.

Uses structlog for logging and Prometheus for metrics.
"""
