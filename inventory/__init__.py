"""inventory/ -- Vehicle records, owner scoping, and margin aggregation.

Layer rule: inventory/ imports from core/ and db/ only. It never imports
auth/ -- callers hand it a plain owner id taken from the verified identity.
"""
