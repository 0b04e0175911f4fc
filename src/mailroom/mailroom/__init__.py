"""Mailroom package tracker.

This package is organized by feature modules (persons, packages, ledger,
queries, notifications, ...) with a thin Flask controller layer over the
service/repository layers.
"""
