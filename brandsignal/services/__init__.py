"""Services that touch the network or orchestrate extraction."""
