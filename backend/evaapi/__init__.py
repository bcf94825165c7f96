"""EvaMap HTTP service."""
