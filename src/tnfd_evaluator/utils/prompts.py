"""Prompt template loading utilities."""

from pathlib import Path
from typing import Optional

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

INSTRUCTIONS_TEMPLATE = Path("evaluator_instructions.txt")
REQUEST_TEMPLATE = Path("evaluation_request.txt")


def load_prompt_template(
    path: Path,
    prompts_dir: Optional[Path] = None,
) -> str:
    """Load a prompt template from file.

    Args:
        path: Path to the prompt file (relative or absolute).
        prompts_dir: Base directory for prompts. If provided and path is relative,
                     it will be joined with prompts_dir. Defaults to the packaged
                     prompts directory.

    Returns:
        The prompt text with surrounding whitespace removed.

    Raises:
        FileNotFoundError: If the prompt file doesn't exist.
    """
    path = Path(path)
    if not path.is_absolute():
        path = Path(prompts_dir or DEFAULT_PROMPTS_DIR) / path

    if not path.exists():
        raise FileNotFoundError(f"Prompt template not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return f.read().strip()
