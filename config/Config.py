# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    """
    Credentials and endpoints for the outbound backends.

    Every field is optional: a missing OpenAI key puts the chat service into
    its "not configured" mode, a missing Chroma configuration puts retrieval
    into fallback mode.
    """

    # OpenAI (chat + embeddings)
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_org: str = ""
    openai_chat_model: str = ""

    # Chroma Vector Database
    chroma_api_key: str = ""
    chroma_tenant: str = ""
    chroma_database: str = ""
    chroma_persist_dir: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "openai_org": "OPENAI_ORG",
        "openai_chat_model": "OPENAI_CHAT_MODEL",

        # Chroma
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",
        "chroma_persist_dir": "CHROMA_PERSIST_DIR",
    }

    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
    )

    CHROMA_CLOUD_ENV_VARS = (
        "CHROMA_API_KEY",
        "CHROMA_TENANT",
        "CHROMA_DATABASE",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or "").strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    @property
    def has_chat_credentials(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def has_chroma_cloud(self) -> bool:
        return bool(self.chroma_api_key and self.chroma_tenant and self.chroma_database)

    @property
    def has_vector_backend(self) -> bool:
        return self.has_chroma_cloud or bool(self.chroma_persist_dir)

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_configured": self.has_chat_credentials,
            "openai_base_url": self.openai_base_url or None,
            "openai_chat_model": self.openai_chat_model or None,
            "chroma_cloud": self.has_chroma_cloud,
            "chroma_tenant": self.chroma_tenant or None,
            "chroma_database": self.chroma_database or None,
            "chroma_persist_dir": self.chroma_persist_dir or None,
        }
