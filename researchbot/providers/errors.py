"""Errors raised while talking to the completion engine."""


class ProviderError(Exception):
    """The completion engine could not produce a response."""

    hint: str | None = None


class ProviderConnectionError(ProviderError):
    """The completion engine is not reachable."""

    hint = "Make sure Ollama is running:\n   ollama serve"

    def __init__(self, api_base: str):
        super().__init__(f"cannot connect to Ollama at {api_base} (connection refused)")
        self.api_base = api_base


class ModelNotFoundError(ProviderError):
    """The requested model is not installed on the completion engine."""

    def __init__(self, model: str):
        super().__init__(f"model '{model}' not found")
        self.model = model

    @property
    def hint(self) -> str:
        return f"Make sure the model is installed:\n   ollama pull {self.model}"
