"""Domain layer: IP address model, ports and the reconciliation core."""
