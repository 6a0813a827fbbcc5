"""Core infrastructure: configuration, database, cache client, auth"""
