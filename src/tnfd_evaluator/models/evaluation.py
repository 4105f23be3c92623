"""Evaluation result data models."""

from typing import Optional
from pathlib import Path
import json

from pydantic import BaseModel, Field


class EvaluationResult(BaseModel):
    """Score and explanation for one submitted report."""

    score: str = Field(..., description="Score line with the percent sign removed")
    explanation: str = Field(default="", description="Explanation paragraph")

    def to_json(self, path: Path) -> None:
        """Save evaluation result to JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, ensure_ascii=False)


class EvaluationHandles(BaseModel):
    """Provider handles created while serving a single evaluation."""

    reference_file_id: Optional[str] = Field(default=None, description="Uploaded reference file")
    user_file_id: Optional[str] = Field(default=None, description="Uploaded user file")
    vector_store_id: Optional[str] = Field(default=None, description="Vector store with both files")
    assistant_id: Optional[str] = Field(default=None, description="Evaluator assistant")
    thread_id: Optional[str] = Field(default=None, description="Conversation thread")
    run_id: Optional[str] = Field(default=None, description="Executed run")

    @property
    def file_ids(self) -> list[str]:
        """Uploaded file ids, reference first."""
        return [fid for fid in (self.reference_file_id, self.user_file_id) if fid]
