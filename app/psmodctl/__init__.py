"""psmodctl - PowerShell module lifecycle management.

Inventories installed PowerShell modules, plans and applies updates,
and prunes superseded module versions.
"""

__version__ = "0.1.0"
