"""
Test suite for the commit store.

Focus areas:
- Codec round-trips and decode failures
- Commit id strategies
- Optimistic concurrency on append
- Per-aggregate and global read ordering
- Schema provisioning and the admin CLI
"""
