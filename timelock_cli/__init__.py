"""
Command line interface for the Timelock SDK.
"""
