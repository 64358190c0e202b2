"""Core app: notification feed reconciliation over the hosted backend."""
