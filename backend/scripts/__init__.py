"""
Backend Scripts Module

Utility scripts for database operations and maintenance.

Available scripts:
    - seed_data.py: Creates demo profiles, roles and complaints

Usage:
    python -m scripts.seed_data
"""
