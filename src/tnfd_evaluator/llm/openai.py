"""Async client for the OpenAI files, vector store and assistants REST API."""

import logging
from pathlib import Path
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ProviderConfig
from ..errors import ProviderDecodeError, ProviderStatusError, ProviderTransportError
from ..models.provider import (
    AssistantObject,
    FileObject,
    RunObject,
    ThreadObject,
    VectorStoreObject,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class OpenAIClient:
    """Client for the provider endpoints used by the evaluation pipeline."""

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            config: Provider configuration. Uses defaults if not provided.
            transport: Optional httpx transport, mainly for tests.
        """
        self.config = config or ProviderConfig()

        if not self.config.api_key:
            raise ValueError("OPENAI_API_KEY is required. Set it in .env or pass via config.")

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "OpenAI-Beta": "assistants=v2",
            },
            timeout=self.config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def upload_file(self, path: Path, purpose: str = "assistants") -> FileObject:
        """Upload a local file.

        Args:
            path: Path of the file to upload.
            purpose: Purpose tag sent alongside the file.

        Returns:
            The created file object.
        """
        path = Path(path)
        with open(path, "rb") as fh:
            data = await self._request(
                "upload_file",
                "POST",
                "/v1/files",
                files={"file": (path.name, fh)},
                data={"purpose": purpose},
            )
        return self._decode("upload_file", FileObject, data)

    async def create_vector_store(self, name: str, file_ids: list[str]) -> VectorStoreObject:
        """Create a vector store containing the given files."""
        data = await self._request(
            "create_vector_store",
            "POST",
            "/v1/vector_stores",
            json={"name": name, "file_ids": list(file_ids)},
        )
        return self._decode("create_vector_store", VectorStoreObject, data)

    async def create_assistant(
        self,
        name: str,
        instructions: str,
        vector_store_id: str,
        model: Optional[str] = None,
    ) -> AssistantObject:
        """Create an assistant with file search scoped to one vector store."""
        payload = {
            "name": name,
            "instructions": instructions,
            "model": model or self.config.model_name,
            "tools": [{"type": "file_search"}],
            "tool_resources": {
                "file_search": {
                    "vector_store_ids": [vector_store_id],
                },
            },
        }
        data = await self._request("create_assistant", "POST", "/v1/beta/assistants", json=payload)
        return self._decode("create_assistant", AssistantObject, data)

    async def create_thread(self, content: str) -> ThreadObject:
        """Create a thread seeded with a single user message."""
        payload = {"messages": [{"role": "user", "content": content}]}
        data = await self._request("create_thread", "POST", "/v1/beta/threads", json=payload)
        return self._decode("create_thread", ThreadObject, data)

    async def create_run(self, thread_id: str, assistant_id: str) -> RunObject:
        """Run an assistant against a thread."""
        data = await self._request(
            "create_run",
            "POST",
            f"/v1/beta/threads/{thread_id}/runs",
            json={"assistant_id": assistant_id},
        )
        return self._decode("create_run", RunObject, data)

    async def delete_file(self, file_id: str) -> None:
        """Delete an uploaded file."""
        await self._request("delete_file", "DELETE", f"/v1/files/{file_id}")

    async def delete_vector_store(self, vector_store_id: str) -> None:
        """Delete a vector store."""
        await self._request("delete_vector_store", "DELETE", f"/v1/vector_stores/{vector_store_id}")

    async def delete_assistant(self, assistant_id: str) -> None:
        """Delete an assistant."""
        await self._request("delete_assistant", "DELETE", f"/v1/beta/assistants/{assistant_id}")

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ProviderTransportError: The request could not be completed.
            ProviderStatusError: The provider returned a non-2xx status.
            ProviderDecodeError: The body is not valid JSON.
        """
        logger.debug(f"{operation}: {method} {path}")

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise ProviderTransportError(
                f"{operation} failed: {e.__class__.__name__}: {e}", operation=operation
            ) from e

        if response.is_error:
            raise ProviderStatusError(
                f"{operation} failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
                operation=operation,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderDecodeError(
                f"{operation} returned a non-JSON body", operation=operation
            ) from e

    @staticmethod
    def _decode(operation: str, model: type[ModelT], data: Any) -> ModelT:
        """Validate a JSON body against the expected response shape."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ProviderDecodeError(
                f"{operation} returned an unexpected payload: {e}", operation=operation
            ) from e
