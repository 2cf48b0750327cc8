"""Domain layer for moneyjar application.

Services import the storage layer, so they are not re-exported here; import
them from their modules to keep ``moneyjar.domain.entities`` importable from
the storage mappers without a cycle.
"""
