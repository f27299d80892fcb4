"""Reconcile, prune and orchestrate sync passes."""
