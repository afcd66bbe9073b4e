"""Core engines for psmodctl: inventory, planning, and version cleanup."""
