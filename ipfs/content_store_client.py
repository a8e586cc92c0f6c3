"""HTTP client for the RPC API of a local IPFS (Kubo) node."""

import json
from typing import Iterator, Optional, Protocol

import httpx

from common.constants import IPFS_API_URL, IPFS_TIMEOUT_SECONDS, STREAM_CHUNK_SIZE
from common.exceptions import TransportError
from common.logging_config import get_logger

logger = get_logger(__name__)


class ContentStore(Protocol):
    """Content-addressed store the integrity workflow depends on."""

    def put(self, content: bytes, name: str = "file") -> str:
        ...

    def get(self, cid: str) -> bytes:
        ...

    def stream(self, cid: str) -> Iterator[bytes]:
        ...


class IpfsClient:
    """
    Client for the Kubo RPC API (all calls are POST under /api/v0).

    Every call is attempted once; transport failures and error responses are
    raised as TransportError.
    """

    def __init__(
        self,
        api_url: str = IPFS_API_URL,
        timeout: float = IPFS_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize IPFS client.

        Args:
            api_url: Base URL of the node's RPC API (e.g., "http://127.0.0.1:5001")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the node in tests)
        """
        self.api_url = api_url
        self.session = httpx.Client(base_url=api_url, timeout=timeout, transport=transport)
        logger.debug(f"Initialized IpfsClient [api_url={api_url}]")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Extract the node's error message from a failed response.

        Args:
            response: HTTP response object

        Returns:
            Human-readable error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('Message') or 'Unknown error'
        except (json.JSONDecodeError, ValueError, AttributeError):
            detail = response.text if response.text else 'Unknown error'

        status_messages = {
            400: 'Bad request',
            403: 'Access forbidden',
            404: 'RPC endpoint not found',
            405: 'Method not allowed',
            500: 'IPFS node error',
        }

        prefix = status_messages.get(response.status_code, f"HTTP {response.status_code}")
        return f"{prefix}: {detail}"

    def _post(self, endpoint: str, **kwargs) -> httpx.Response:
        logger.debug(f"Making request: POST {endpoint}")
        try:
            response = self.session.post(endpoint, **kwargs)
        except httpx.ConnectError as e:
            logger.error(f"Cannot connect to IPFS node at {self.api_url}: {e}")
            raise TransportError("Cannot connect to IPFS node. Is the daemon running?") from e
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: POST {endpoint}")
            raise TransportError("Request to IPFS node timed out.") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error: POST {endpoint} error={e}")
            raise TransportError(f"IPFS request failed: {e}") from e

        logger.debug(f"Response received: POST {endpoint} status={response.status_code}")
        if response.status_code != 200:
            message = self._format_error(response)
            logger.warning(f"IPFS error: POST {endpoint} status={response.status_code} {message}")
            raise TransportError(message, status_code=response.status_code)
        return response

    def put(self, content: bytes, name: str = "file") -> str:
        """
        Add content to the node and pin it.

        Args:
            content: Bytes to store
            name: File name reported to the node

        Returns:
            CID of the stored content
        """
        response = self._post(
            '/api/v0/add',
            params={'pin': 'true', 'cid-version': '0'},
            files={'file': (name, content, 'application/octet-stream')},
        )

        lines = [line for line in response.text.splitlines() if line.strip()]
        try:
            result = json.loads(lines[-1])
            cid = result['Hash']
        except (IndexError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise TransportError(f"Unexpected response from IPFS add: {response.text[:200]}") from e

        logger.info(f"Added {name} to IPFS [cid={cid}, size={len(content)}]")
        return cid

    def get(self, cid: str) -> bytes:
        """
        Fetch the full content for a CID.
        """
        return b''.join(self.stream(cid))

    def stream(self, cid: str, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
        """
        Stream the content for a CID in pieces.

        Yields:
            Content pieces

        Raises:
            TransportError: If the node cannot serve the CID
        """
        logger.debug(f"Making request: POST /api/v0/cat [cid={cid}]")
        try:
            with self.session.stream('POST', '/api/v0/cat', params={'arg': cid}) as response:
                if response.status_code != 200:
                    response.read()
                    message = self._format_error(response)
                    logger.warning(f"IPFS cat failed [cid={cid}] status={response.status_code} {message}")
                    raise TransportError(message, status_code=response.status_code)

                for chunk in response.iter_bytes(chunk_size=chunk_size):
                    yield chunk
        except httpx.ConnectError as e:
            logger.error(f"Cannot connect to IPFS node at {self.api_url}: {e}")
            raise TransportError("Cannot connect to IPFS node. Is the daemon running?") from e
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: cat {cid}")
            raise TransportError("Request to IPFS node timed out.") from e
        except httpx.HTTPError as e:
            raise TransportError(f"IPFS request failed: {e}") from e

    def pin(self, cid: str) -> None:
        """Pin a CID on the node."""
        self._post('/api/v0/pin/add', params={'arg': cid})
        logger.info(f"Pinned {cid}")

    def is_available(self) -> bool:
        """
        Check whether the node answers on its RPC API.
        """
        try:
            response = self.session.post('/api/v0/version')
        except httpx.HTTPError as e:
            logger.debug(f"IPFS node at {self.api_url} not reachable: {e}")
            return False
        if response.status_code != 200:
            logger.debug(f"IPFS node at {self.api_url} answered version with status {response.status_code}")
            return False
        try:
            version = response.json().get('Version', 'unknown')
        except (json.JSONDecodeError, ValueError, AttributeError):
            version = 'unknown'
        logger.info(f"Connected to IPFS node version {version}")
        return True

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> 'IpfsClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
