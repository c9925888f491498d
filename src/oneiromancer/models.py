"""Wire and payload schemas for the Ollama generate API.

The generate endpoint wraps the model output in an envelope: the
``response`` field of the envelope is itself a JSON document holding the
actual analysis, so decoding happens in two steps.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from oneiromancer.errors import ResponseParseFailed

logger = logging.getLogger(__name__)

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisResult",
    "RenameSuggestion",
]


class AnalysisRequest(BaseModel):
    """Body of a POST to /api/generate."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Name of the model to use for the analysis")
    prompt: str = Field(description="Pseudocode to analyze")
    # Ask for a single complete JSON answer instead of a token stream
    stream: bool = False
    format: str = "json"


class RenameSuggestion(BaseModel):
    """Variable renaming suggestion."""

    model_config = ConfigDict(frozen=True)

    original_name: str = Field(description="Original name of the variable")
    new_name: str = Field(description="Suggested name for the variable")

    def __str__(self) -> str:
        return f"{self.original_name} -> {self.new_name}"


class AnalysisResult(BaseModel):
    """Code analysis results decoded from the model output."""

    model_config = ConfigDict(frozen=True)

    function_name: str = Field(description="Recommended function name")
    comment: str = Field(description="Function description")
    variables: list[RenameSuggestion] = Field(
        description="Variable renaming suggestions, in application order"
    )


class AnalysisResponse(BaseModel):
    """Envelope returned by /api/generate. Other envelope fields are ignored."""

    response: str

    def decode(self) -> AnalysisResult:
        """Parse the inner JSON document into an AnalysisResult.

        Raises:
            ResponseParseFailed: if the inner document is not valid JSON
                (including the empty string Ollama returns for an empty
                prompt) or does not have the expected shape.

        """
        try:
            return AnalysisResult.model_validate_json(self.response)
        except ValidationError as e:
            logger.debug(f"Inner response did not validate: {self.response[:200]!r}")
            raise ResponseParseFailed("Failed to parse analysis results", e) from e
