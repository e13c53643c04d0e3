"""
Boundary layer for external system integrations.

Handles all interactions with external systems (session database, blob
storage, language model). Provides adapters and clients for infrastructure
dependencies.
"""
