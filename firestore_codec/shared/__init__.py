"""Shared utilities: logging, assertions, and datetime helpers.

Used by domain, application, and infrastructure. No codec logic.
"""
