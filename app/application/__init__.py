"""Application layer: interfaces (ports), DTOs, and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (store, identity, blobs, gateway).
"""
