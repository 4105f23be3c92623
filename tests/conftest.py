"""Shared pytest fixtures for tnfd-evaluator tests."""

import json
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tnfd_evaluator.config import Config, EvaluationConfig, ProviderConfig, ServerConfig
from tnfd_evaluator.llm.openai import OpenAIClient
from tnfd_evaluator.models.provider import (
    AssistantObject,
    FileObject,
    RunMessage,
    RunObject,
    ThreadObject,
    VectorStoreObject,
)


@pytest.fixture
def reference_pdf(tmp_path: Path) -> Path:
    """Create a stand-in reference document."""
    path = tmp_path / "recommendations.pdf"
    path.write_bytes(b"%PDF-1.4 reference recommendations")
    return path


@pytest.fixture
def user_pdf(tmp_path: Path) -> Path:
    """Create a stand-in user report."""
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4 user report")
    return path


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Provider configuration with a fake key."""
    return ProviderConfig(api_key="test-key", base_url="https://api.test")


@pytest.fixture
def evaluation_config(reference_pdf: Path) -> EvaluationConfig:
    """Evaluation configuration pointing at the stand-in reference."""
    return EvaluationConfig(reference_path=reference_pdf)


@pytest.fixture
def app_config(
    tmp_path: Path,
    provider_config: ProviderConfig,
    evaluation_config: EvaluationConfig,
) -> Config:
    """Full configuration for the web app, rooted in a temp directory."""
    return Config(
        provider=provider_config,
        evaluation=evaluation_config,
        server=ServerConfig(
            upload_dir=tmp_path / "uploads",
            static_dir=tmp_path / "public",
        ),
    )


@pytest.fixture
def evaluation_content() -> str:
    """Sample evaluator reply."""
    return "87%\nThe report demonstrates strong alignment with the LEAP approach."


@pytest.fixture
def mock_openai_client(evaluation_content: str) -> MagicMock:
    """Create a mock provider client.

    Ids are derived from their inputs so a call chain can be traced back to
    the request that produced it.
    """

    async def upload_file(path: Path, purpose: str = "assistants") -> FileObject:
        return FileObject(id=f"file-{Path(path).stem}", purpose=purpose)

    async def create_vector_store(name: str, file_ids: list[str]) -> VectorStoreObject:
        return VectorStoreObject(id=f"vs-{file_ids[-1]}", name=name)

    async def create_assistant(
        name: str, instructions: str, vector_store_id: str, model=None
    ) -> AssistantObject:
        return AssistantObject(id=f"asst-{vector_store_id}", name=name)

    async def create_thread(content: str) -> ThreadObject:
        return ThreadObject(id="thread-001")

    async def create_run(thread_id: str, assistant_id: str) -> RunObject:
        return RunObject(
            id=f"run-{assistant_id}",
            status="completed",
            messages=[RunMessage(role="assistant", content=evaluation_content)],
        )

    client = MagicMock(spec=OpenAIClient)
    client.upload_file = AsyncMock(side_effect=upload_file)
    client.create_vector_store = AsyncMock(side_effect=create_vector_store)
    client.create_assistant = AsyncMock(side_effect=create_assistant)
    client.create_thread = AsyncMock(side_effect=create_thread)
    client.create_run = AsyncMock(side_effect=create_run)
    client.delete_file = AsyncMock(return_value=None)
    client.delete_vector_store = AsyncMock(return_value=None)
    client.delete_assistant = AsyncMock(return_value=None)
    return client


class FakeProvider:
    """httpx handler that mimics the provider endpoints and records requests."""

    def __init__(self, run_content: str):
        self.run_content = run_content
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self._uploads = 0

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(method, path) of every request seen, in order."""
        return [(r.method, r.url.path) for r in self.requests]

    def json_body(self, index: int) -> dict:
        """Decoded JSON body of the request at ``index``."""
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.overrides:
            return self.overrides[key](request)

        path = request.url.path
        if request.method == "DELETE":
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1], "deleted": True})
        if path == "/v1/files":
            self._uploads += 1
            return httpx.Response(200, json={"id": f"file-{self._uploads}", "object": "file"})
        if path == "/v1/vector_stores":
            return httpx.Response(200, json={"id": "vs-1", "object": "vector_store"})
        if path == "/v1/beta/assistants":
            return httpx.Response(200, json={"id": "asst-1", "object": "assistant"})
        if path == "/v1/beta/threads":
            return httpx.Response(200, json={"id": "thread-1", "object": "thread"})
        if path == "/v1/beta/threads/thread-1/runs":
            return httpx.Response(
                200,
                json={
                    "id": "run-1",
                    "status": "completed",
                    "messages": [{"role": "assistant", "content": self.run_content}],
                },
            )
        return httpx.Response(404, json={"error": {"message": f"Unknown path {path}"}})


@pytest.fixture
def fake_provider(evaluation_content: str) -> FakeProvider:
    """Recording fake of the provider REST API."""
    return FakeProvider(evaluation_content)


@pytest.fixture
def make_client(
    provider_config: ProviderConfig, fake_provider: FakeProvider
) -> Callable[[], OpenAIClient]:
    """Build provider clients wired to the fake provider."""

    def factory() -> OpenAIClient:
        return OpenAIClient(provider_config, transport=httpx.MockTransport(fake_provider))

    return factory
