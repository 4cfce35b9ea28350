"""Ports (interfaces) for the access bounded context.

Ports define the contracts for the identity store, the inventory registry
and the grant and share stores, plus the closed set of errors the engine
reports. Import from the submodules directly: domain aggregates depend on
`access.ports.exceptions`, so this package does not re-export repositories.
"""
