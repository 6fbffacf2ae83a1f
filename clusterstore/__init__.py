"""
Repositories for cluster, cluster configuration and stack records.
"""
