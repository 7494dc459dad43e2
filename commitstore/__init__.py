"""
DynamoDB Commit Store

Append-only event-sourcing commit log with per-aggregate optimistic concurrency
and a globally ordered commit feed for projections and replication.
"""

__version__ = "0.1.0"
