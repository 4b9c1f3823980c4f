"""Adapters binding the reconciliation core to FMC and local storage."""
