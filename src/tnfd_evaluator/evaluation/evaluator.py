"""Evaluation orchestrator for the complete evaluation pipeline."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..config import EvaluationConfig
from ..errors import EvaluationInputError
from ..llm.openai import OpenAIClient
from ..models.evaluation import EvaluationHandles, EvaluationResult
from ..utils.prompts import INSTRUCTIONS_TEMPLATE, REQUEST_TEMPLATE, load_prompt_template
from .parser import parse_evaluation

logger = logging.getLogger(__name__)


class Evaluator:
    """Compare a submitted report against the reference document.

    Each call to :meth:`evaluate` uploads both documents, builds a vector
    store from them, and asks a freshly created assistant to score the
    submission. All provider handles are scoped to that one call.
    """

    def __init__(
        self,
        client: OpenAIClient,
        config: Optional[EvaluationConfig] = None,
        prompts_dir: Optional[Path] = None,
    ):
        """Initialize evaluator.

        Args:
            client: Provider client used for every outbound call.
            config: Evaluation configuration.
            prompts_dir: Directory containing prompt templates. Defaults to the
                         packaged prompts.
        """
        self.client = client
        self.config = config or EvaluationConfig()
        self.prompts_dir = Path(prompts_dir) if prompts_dir else None

        self._instructions: Optional[str] = None
        self._request_message: Optional[str] = None

    def _get_instructions(self) -> str:
        """Get or load the assistant instructions."""
        if self._instructions is None:
            self._instructions = load_prompt_template(INSTRUCTIONS_TEMPLATE, self.prompts_dir)
        return self._instructions

    def _get_request_message(self) -> str:
        """Get or load the message that opens each thread."""
        if self._request_message is None:
            self._request_message = load_prompt_template(REQUEST_TEMPLATE, self.prompts_dir)
        return self._request_message

    async def evaluate(self, user_file_path: Union[str, Path, None]) -> EvaluationResult:
        """Execute the full evaluation pipeline for one submitted report.

        Args:
            user_file_path: Local path of the uploaded report.

        Returns:
            EvaluationResult with score and explanation.

        Raises:
            EvaluationInputError: The report path is missing or unreadable.
            ProviderError: Any provider call failed or returned an unexpected payload.
        """
        if not user_file_path:
            raise EvaluationInputError("No report was uploaded")
        user_path = Path(user_file_path)
        if not user_path.is_file():
            raise EvaluationInputError(f"Uploaded report not found: {user_path}")

        handles = EvaluationHandles()
        logger.info(f"Evaluating {user_path.name} against {self.config.reference_path.name}")

        try:
            # 1-2. Upload reference and user documents
            await self._upload_documents(user_path, handles)

            # 3. Build the retrieval index from both files
            handles.vector_store_id = await self.create_index(handles.file_ids)

            # 4. Ask the evaluator assistant for a verdict
            result = await self.run_evaluation(handles.vector_store_id, handles)
        except Exception:
            logger.error(f"Evaluation of {user_path.name} failed with handles {handles.model_dump()}")
            if self.config.cleanup_on_failure:
                await self.cleanup(handles)
            raise

        logger.info(f"Evaluation complete for {user_path.name}. Score: {result.score}")
        return result

    async def _upload_documents(self, user_path: Path, handles: EvaluationHandles) -> None:
        """Upload the reference and user documents, recording both ids."""
        if self.config.concurrent_uploads:
            reference_id, user_id = await asyncio.gather(
                self.upload_file(self.config.reference_path),
                self.upload_file(user_path),
                return_exceptions=True,
            )
            # Keep whichever upload succeeded so cleanup can release it
            if not isinstance(reference_id, BaseException):
                handles.reference_file_id = reference_id
            if not isinstance(user_id, BaseException):
                handles.user_file_id = user_id
            for outcome in (reference_id, user_id):
                if isinstance(outcome, BaseException):
                    raise outcome
        else:
            handles.reference_file_id = await self.upload_file(self.config.reference_path)
            handles.user_file_id = await self.upload_file(user_path)

    async def upload_file(self, path: Path) -> str:
        """Upload one document and return its file id."""
        file_obj = await self.client.upload_file(path, purpose=self.config.file_purpose)
        logger.debug(f"Uploaded {Path(path).name} as {file_obj.id}")
        return file_obj.id

    async def create_index(self, file_ids: list[str]) -> str:
        """Create a vector store over the given files and return its id."""
        store = await self.client.create_vector_store(self.config.vector_store_name, file_ids)
        logger.debug(f"Created vector store {store.id} with files {file_ids}")
        return store.id

    async def run_evaluation(
        self,
        vector_store_id: str,
        handles: Optional[EvaluationHandles] = None,
    ) -> EvaluationResult:
        """Create the evaluator assistant, run it on a new thread, and parse the reply.

        Args:
            vector_store_id: Vector store the assistant searches.
            handles: Optional record that receives the created handles.

        Returns:
            EvaluationResult parsed from the first run message.
        """
        handles = handles if handles is not None else EvaluationHandles()

        assistant = await self.client.create_assistant(
            name=self.config.assistant_name,
            instructions=self._get_instructions(),
            vector_store_id=vector_store_id,
        )
        handles.assistant_id = assistant.id
        logger.debug(f"Created assistant {assistant.id}")

        thread = await self.client.create_thread(self._get_request_message())
        handles.thread_id = thread.id
        logger.debug(f"Created thread {thread.id}")

        run = await self.client.create_run(thread.id, assistant.id)
        handles.run_id = run.id
        logger.debug(f"Run {run.id} finished with status {run.status}")

        return parse_evaluation(run.content)

    async def cleanup(self, handles: EvaluationHandles) -> None:
        """Delete provider resources created for a failed evaluation.

        Failures are logged and never raised, so the original error is kept.
        """
        deletions = []
        if handles.assistant_id:
            deletions.append(("assistant", handles.assistant_id, self.client.delete_assistant))
        if handles.vector_store_id:
            deletions.append(("vector store", handles.vector_store_id, self.client.delete_vector_store))
        for file_id in handles.file_ids:
            deletions.append(("file", file_id, self.client.delete_file))

        for kind, resource_id, delete in deletions:
            try:
                await delete(resource_id)
                logger.info(f"Deleted {kind} {resource_id}")
            except Exception as e:
                logger.warning(f"Failed to delete {kind} {resource_id}: {e}")
