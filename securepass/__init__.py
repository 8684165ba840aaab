# =======================================================================================
# securepass/__init__.py - Package Initialization
# =======================================================================================
"""
SecurePass - Visitor & Gate-Pass Management

A single-node gate-pass service: visitors request passes, staff approve,
check in and check out, and every change is mirrored into a persistent
key-value store.
"""

__version__ = "1.0.0"
__author__ = "SecurePass Team"
