"""Default text generator: a Markov chain seeded by the event."""
import math
import random
from typing import Optional

from narrative.interfaces import Article, GenerationResult
from narrative.micro_llm import TRAINING_CORPUS, MicroLLM, build_model

SEED_PHRASES = {
    'positive': 'stock surged',
    'negative': 'is facing headwinds',
    'split': 'announced a stock split',
    'merger': 'is acquiring a rival',
    'alliance': 'formed a strategic alliance',
}

# Outcome feedback moves a transition weight by at most this fraction
MAX_LEARNING_ADJUSTMENT = 0.05
OUTCOME_SENSITIVITY = 5
MIN_TRANSITION_WEIGHT = 0.1

REFINEMENT_FACTOR = 1.001
REFINEMENT_CHUNK = 500

MIN_ARTICLE_LENGTH = 500
ARTICLE_LENGTH_RANGE = 300
SENTENCES_PER_PARAGRAPH = 3


class MarkovNewsGenerator:
    """Writes articles by sampling a character-level Markov model.

    The model learns from outcomes: transitions used in an article whose
    subject outperformed are boosted, those in an underperforming article are
    damped. During idle time it re-reads a random chunk of its corpus.
    """

    def __init__(self, rng: Optional[random.Random] = None, corpus: str = TRAINING_CORPUS):
        self.rng = rng or random.Random()
        self.corpus = corpus

    def create_model(self) -> MicroLLM:
        return build_model(self.corpus)

    def generate(self, event, state) -> GenerationResult:
        model: MicroLLM = state.text_model
        if model is None or not model.transition_table:
            raise ValueError("Text model is empty")

        stock = state.get_stock(event.stock_symbol) if event.stock_symbol else None
        seed = f"{stock.name} ({stock.symbol}) " if stock else "The global market "
        seed += SEED_PHRASES.get(event.type, '')
        seed = seed.ljust(model.order + 1)

        text = seed
        gram = text[-model.order:]
        grams = list(model.transition_table)
        for _ in range(MIN_ARTICLE_LENGTH + self.rng.randrange(ARTICLE_LENGTH_RANGE)):
            weights = model.transition_table.get(gram)
            if not weights:
                # Dead end: jump to a random known context
                gram = self.rng.choice(grams)
                continue
            text += self._sample(weights)
            gram = text[-model.order:]

        cleaned = text.strip()
        last_stop = cleaned.rfind('.')
        if last_stop != -1:
            cleaned = cleaned[:last_stop + 1]

        sentences = [sentence.strip() for sentence in cleaned.split('. ')]
        paragraphs = []
        for start in range(0, len(sentences), SENTENCES_PER_PARAGRAPH):
            chunk = sentences[start:start + SENTENCES_PER_PARAGRAPH]
            paragraphs.append('. '.join(sentence.rstrip('.') for sentence in chunk) + '.')
        summary = '. '.join(sentence.rstrip('.') for sentence in sentences[:2]) + '.'

        article = Article(headline=event.event_name, summary=summary, full_text='\n\n'.join(paragraphs))
        return GenerationResult(article=article, generated_text=cleaned)

    def _sample(self, weights) -> str:
        target = self.rng.random() * sum(weights.values())
        for char, weight in weights.items():
            target -= weight
            if target <= 0:
                return char
        return next(iter(weights))

    def learn_from_outcome(self, model: MicroLLM, generated_text: str, outcome: float) -> MicroLLM:
        """Reinforce or damp the transitions used in ``generated_text``.

        ``outcome`` is a performance ratio where 1.0 is neutral. Mutates and
        returns ``model``.
        """
        boost = 1 + math.tanh((outcome - 1) * OUTCOME_SENSITIVITY) * MAX_LEARNING_ADJUSTMENT
        model.scale_transitions(generated_text, boost, floor=MIN_TRANSITION_WEIGHT)
        return model

    def refine(self, model: MicroLLM) -> MicroLLM:
        """Idle-time pass over a random corpus chunk. Mutates and returns ``model``."""
        if len(self.corpus) <= REFINEMENT_CHUNK:
            chunk = self.corpus
        else:
            start = self.rng.randrange(len(self.corpus) - REFINEMENT_CHUNK)
            chunk = self.corpus[start:start + REFINEMENT_CHUNK]
        model.scale_transitions(chunk, REFINEMENT_FACTOR)
        return model
