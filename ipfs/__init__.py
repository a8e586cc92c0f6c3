"""Client for the IPFS content store."""

from ipfs.content_store_client import ContentStore, IpfsClient

__all__ = ["ContentStore", "IpfsClient"]
