"""Utilitaires internes (logging, callbacks sync/async)."""
