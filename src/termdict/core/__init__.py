"""
Core primitives: errors, logging, settings, store connection, schema
inference, and the read-only term repository.
"""
