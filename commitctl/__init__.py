"""
commitctl - Commit Store administration CLI

Commands:
- commitctl schema create/drop/status - Table provisioning
- commitctl log append/query/scan - Commit log operations
"""

__version__ = "0.1.0"
