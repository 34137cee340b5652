"""Feature modules for ASA Quick Creator."""
