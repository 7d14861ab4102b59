"""
Runtime configuration for the knowledge desk.
All settings come from environment variables (optionally a .env file).
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/chavis.db")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Vector projection configuration
VECTOR_PROVIDER = os.getenv("VECTOR_PROVIDER", "memory")  # memory|faiss
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))
REINDEX_ON_STARTUP = os.getenv("REINDEX_ON_STARTUP", "true").lower() == "true"

# Answering configuration
RAG_TOP_K = int(os.getenv("RAG_TOP_K", "5"))
REFUSAL_MESSAGE = os.getenv(
    "REFUSAL_MESSAGE",
    "해당 정보는 등록되어 있지 않습니다. 인사/총무에 문의해 주세요.",
)

# Generation configuration
GENERATOR_PROVIDER = os.getenv("GENERATOR_PROVIDER", "ollama")  # ollama|mock
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3")
OLLAMA_HOST = os.getenv("OLLAMA_HOST")  # None lets the ollama client use its default
OLLAMA_TEMPERATURE = float(os.getenv("OLLAMA_TEMPERATURE", "0.2"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

VERSION = "1.0.0"


def get_vector_store(dimension: int = None):
    """Get configured vector store implementation."""
    dimension = dimension or EMBED_DIM

    if VECTOR_PROVIDER == "faiss":
        from chavis.vector.faiss_store import FaissVectorStore
        return FaissVectorStore(dimension=dimension)

    from chavis.vector.index import SimpleInMemoryVectorStore
    return SimpleInMemoryVectorStore()


def get_embedding_provider():
    """Get configured embedding provider implementation."""
    if EMBED_PROVIDER == "sentence":
        from chavis.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(EMBED_MODEL_NAME)

    from chavis.vector.embeddings import DeterministicHashEmbedding
    return DeterministicHashEmbedding(dimension=EMBED_DIM)


def get_generator():
    """Get configured text generation adapter."""
    if GENERATOR_PROVIDER == "mock":
        from chavis.agents.mock_agent import MockGenerator
        return MockGenerator()

    from chavis.agents.ollama_agent import OllamaGenerator
    return OllamaGenerator(
        model_name=OLLAMA_MODEL,
        host=OLLAMA_HOST,
        temperature=OLLAMA_TEMPERATURE,
    )


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if VECTOR_PROVIDER not in ["memory", "faiss"]:
        issues.append(f"Invalid VECTOR_PROVIDER: {VECTOR_PROVIDER}")

    if EMBED_PROVIDER not in ["hash", "sentence"]:
        issues.append(f"Invalid EMBED_PROVIDER: {EMBED_PROVIDER}")

    if GENERATOR_PROVIDER not in ["ollama", "mock"]:
        issues.append(f"Invalid GENERATOR_PROVIDER: {GENERATOR_PROVIDER}")

    if RAG_TOP_K < 1:
        issues.append("RAG_TOP_K must be >= 1")

    if EMBED_DIM < 1:
        issues.append("EMBED_DIM must be >= 1")

    if not REFUSAL_MESSAGE.strip():
        issues.append("REFUSAL_MESSAGE cannot be empty")

    return issues
