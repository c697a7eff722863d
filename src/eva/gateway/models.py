from pydantic import BaseModel, ConfigDict, Field

from ..prompts import FALLBACK_EMPTY, FALLBACK_UNAVAILABLE


class CompletionResult(BaseModel):
    """Outcome of one gateway call.

    Separates what happened (text or error) from how it is shown: the
    `reply` property renders a failure or an empty answer as the fixed
    fallback sentences the front-ends display.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Generated text, possibly empty")
    error: str | None = Field(default=None, description="Failure cause for operators, never shown to users")

    @classmethod
    def failure(cls, error: str) -> "CompletionResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reply(self) -> str:
        if not self.ok:
            return FALLBACK_UNAVAILABLE
        if not self.text:
            return FALLBACK_EMPTY
        return self.text
