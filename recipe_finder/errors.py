class RecipeFinderError(Exception):
    pass


class ConfigurationError(RecipeFinderError):
    """A required setting (API key, credentials) is missing."""


class GatewayError(RecipeFinderError):
    """The chat-completion gateway answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"AI Gateway error: {status_code}")
        self.status_code = status_code
        self.body = body
