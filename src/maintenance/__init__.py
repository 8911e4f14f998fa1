"""Maintenance workflow: work-order creation and status lifecycle."""
