"""
Generate technical tags for a project using Ollama.
Sends the project name and path to /api/generate and turns the comma-separated answer
into a clean list of lowercase tags.
"""

import logging

import httpx
from ollama import Client, ResponseError

from src.indexer.config import get_model_name
from src.indexer.errors import EnrichmentError
from src.indexer.models import normalize_tags

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a technical project tagger. "
    "Output ONLY comma-separated tags, no explanations or additional text."
)

USER_PROMPT_TEMPLATE = (
    "Generate 3-5 technical tags for this project named '{name}'. Description: {description}. "
    "Output ONLY comma-separated tags, no explanations or additional text."
)

GENERATE_OPTIONS = {"temperature": 0.7, "num_predict": 100}

# ollama raises the builtin ConnectionError when the server is unreachable;
# pydantic validation and JSON decoding errors are ValueErrors.
_CLIENT_ERRORS = (ResponseError, ConnectionError, httpx.HTTPError, ValueError)


def extract_tags(text: str) -> list[str]:
    """
    Turn raw model output into tags: split on newlines and commas, trim, lowercase,
    strip * : . ( ) [ ] { } and drop empty tokens.
    """
    tokens = [token for line in text.strip().splitlines() for token in line.split(",")]
    return list(normalize_tags(tokens))


def make_client(host: str | None = None, timeout: float = 30.0) -> Client:
    """Ollama client; host None means OLLAMA_HOST or localhost:11434."""
    return Client(host=host, timeout=timeout)


class OllamaTagSource:
    """Tag source backed by a local Ollama server. One request per project, no retries."""

    def __init__(
        self,
        model: str | None = None,
        host: str | None = None,
        timeout: float = 30.0,
        client: Client | None = None,
    ):
        self.model = get_model_name(model)
        self.client = client if client is not None else make_client(host, timeout)

    def enrich(self, project_name: str, project_path: str) -> list[str]:
        if not project_name:
            raise EnrichmentError("Invalid project name")
        prompt = USER_PROMPT_TEMPLATE.format(name=project_name, description=project_path)
        try:
            response = self.client.generate(
                model=self.model,
                prompt=prompt,
                system=SYSTEM_PROMPT,
                options=GENERATE_OPTIONS,
                stream=False,
            )
        except _CLIENT_ERRORS as e:
            raise EnrichmentError(f"Ollama request for {project_name!r} failed: {e}") from e
        raw = response.get("response") or ""
        logger.debug("Ollama answered for %s: %r", project_name, raw)
        return extract_tags(raw)


class StaticTagSource:
    """Returns the same tags for every project."""

    def __init__(self, tags):
        self.tags = list(normalize_tags(tags))

    def enrich(self, project_name: str, project_path: str) -> list[str]:
        return list(self.tags)


def check_availability(client: Client) -> bool:
    """True if the Ollama server answers a model listing."""
    try:
        client.list()
    except _CLIENT_ERRORS as e:
        logger.warning("Ollama service is not available: %s", e)
        return False
    return True


def _model_names(client: Client) -> set[str]:
    listing = client.list()
    names = set()
    for entry in listing.get("models") or []:
        name = entry.get("model") or entry.get("name")
        if name:
            names.add(name)
    return names


def ensure_model_available(client: Client, model: str | None = None, pull: bool = True) -> str:
    """
    Pull the model if the local Ollama server does not have it yet.
    With pull=False a missing model is an error instead of a download.
    Returns the model name; raises EnrichmentError if listing or pulling fails.
    """
    model = get_model_name(model)
    try:
        names = _model_names(client)
        # "mistral" is stored as "mistral:latest"
        if model in names or f"{model}:latest" in names:
            return model
        if not pull:
            raise EnrichmentError(f"Model {model!r} is not available locally (run: ollama pull {model})")
        logger.info("Pulling required model '%s'...", model)
        client.pull(model)
    except _CLIENT_ERRORS as e:
        raise EnrichmentError(f"Could not make model {model!r} available: {e}") from e
    logger.info("Model '%s' pulled successfully", model)
    return model
