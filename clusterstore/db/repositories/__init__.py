"""
Per-domain repository modules for database access.

Every function takes the active `Session` as its first argument and never
commits; callers own the transaction (see `clusterstore.db.database.session_scope`).
"""
