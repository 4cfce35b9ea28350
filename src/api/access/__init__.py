"""Access bounded context.

Decides what a user may do on an inventory from ownership, all-access grants
and per-inventory shares, and coordinates ownership transfer.
"""
