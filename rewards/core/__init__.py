"""Core infrastructure: configuration, logging, database, retries"""
