"""Configuration management for TNFD Evaluator."""

import os
from dataclasses import dataclass, field, asdict
from typing import Optional, Any
from pathlib import Path

import yaml
from dotenv import load_dotenv


DEFAULT_REFERENCE_PDF = (
    "Recommendations_of_the_Taskforce_on_Nature-related_Financial_Disclosures_September_2023.pdf"
)


@dataclass
class ProviderConfig:
    """Configuration for the OpenAI REST client."""

    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com"
    model_name: str = "gpt-4"
    timeout: Optional[float] = 120.0

    def __post_init__(self):
        if self.api_key is None:
            load_dotenv()
            self.api_key = os.getenv("OPENAI_API_KEY")


@dataclass
class EvaluationConfig:
    """Configuration for the evaluation pipeline."""

    reference_path: Path = field(default_factory=lambda: Path(DEFAULT_REFERENCE_PDF))
    vector_store_name: str = "TNFD Evaluation Store"
    assistant_name: str = "TNFD Evaluator"
    file_purpose: str = "assistants"
    concurrent_uploads: bool = False
    cleanup_on_failure: bool = False


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 3000
    upload_dir: Path = field(default_factory=lambda: Path("uploads"))
    static_dir: Path = field(default_factory=lambda: Path("public"))
    # Stored PDFs are left on disk unless disabled
    keep_uploads: bool = True


@dataclass
class Config:
    """Main configuration container."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    prompts_dir: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        load_dotenv()
        provider = ProviderConfig(
            api_key=os.getenv("OPENAI_API_KEY"),
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com"),
            model_name=os.getenv("TNFD_MODEL", "gpt-4"),
        )
        evaluation = EvaluationConfig(
            reference_path=Path(os.getenv("TNFD_REFERENCE_PDF", DEFAULT_REFERENCE_PDF)),
        )
        server = ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            upload_dir=Path(os.getenv("TNFD_UPLOAD_DIR", "uploads")),
            static_dir=Path(os.getenv("TNFD_STATIC_DIR", "public")),
            keep_uploads=os.getenv("TNFD_KEEP_UPLOADS", "true").lower()
            in ("1", "true", "yes"),
        )
        return cls(
            provider=provider,
            evaluation=evaluation,
            server=server,
            log_level=os.getenv("TNFD_LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        data = asdict(self)
        # Convert Path to string
        data["evaluation"]["reference_path"] = str(self.evaluation.reference_path)
        data["server"]["upload_dir"] = str(self.server.upload_dir)
        data["server"]["static_dir"] = str(self.server.static_dir)
        if self.prompts_dir is not None:
            data["prompts_dir"] = str(self.prompts_dir)
        else:
            del data["prompts_dir"]
        # Never persist the credential
        data["provider"].pop("api_key", None)
        return data

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file.

        The API key is always taken from the environment.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        provider_data = dict(data.get("provider", {}))
        evaluation_data = dict(data.get("evaluation", {}))
        server_data = dict(data.get("server", {}))

        provider_data.pop("api_key", None)

        if "reference_path" in evaluation_data:
            evaluation_data["reference_path"] = Path(evaluation_data["reference_path"])
        for key in ["upload_dir", "static_dir"]:
            if key in server_data:
                server_data[key] = Path(server_data[key])

        prompts_dir = Path(data["prompts_dir"]) if data.get("prompts_dir") else None

        return cls(
            provider=ProviderConfig(**provider_data),
            evaluation=EvaluationConfig(**evaluation_data),
            server=ServerConfig(**server_data),
            prompts_dir=prompts_dir,
            log_level=data.get("log_level", "INFO"),
        )
