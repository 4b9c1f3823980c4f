"""Resource-agnostic reconciliation domain."""
