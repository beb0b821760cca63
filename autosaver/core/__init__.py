"""
Core utilities shared by the sync engine and the CLI.
"""
