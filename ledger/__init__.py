"""Persistent ledger of ingested files."""

from ledger.metadata_ledger import MetadataLedger

__all__ = ["MetadataLedger"]
