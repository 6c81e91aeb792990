"""
Shared Kernel

Base classes, value objects, domain errors and infrastructure glue used by
every app of the marketplace.
"""
