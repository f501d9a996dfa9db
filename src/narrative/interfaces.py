from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class Article:
    headline: str
    summary: str
    full_text: str


@dataclass
class GenerationResult:
    """Article plus the raw character sequence it was cut from"""
    article: Article
    generated_text: str


class TextGenerator(Protocol):
    """Protocol for news text generators

    The model is opaque to the engine: it is created here, stored on the
    state, handed back on every call and replaced by whatever is returned.
    """
    def create_model(self) -> Any:
        pass

    def generate(self, event, state) -> GenerationResult:
        pass

    def learn_from_outcome(self, model: Any, generated_text: str, outcome: float) -> Any:
        pass

    def refine(self, model: Any) -> Any:
        pass


class ImageLookup(Protocol):
    """Protocol for illustration lookups; purely advisory"""
    def lookup(self, headline: str, *keywords: str) -> str:
        pass
