"""Default image lookup: maps headline keywords to an illustration URL."""
from typing import List, Optional
from urllib.parse import quote

IMAGE_ENDPOINT = "https://source.unsplash.com/featured/800x600/?"

SECTORS = ('Technology', 'Health', 'Energy', 'Finance', 'Industrials')
SENTIMENTS = ('positive', 'negative', 'neutral')

# Concepts that describe an event but make poor search terms
ABSTRACT_CONCEPTS = {
    'positive', 'negative', 'neutral', 'update', 'stability', 'recession', 'growth', 'split',
}

CONCEPT_PRIORITY = {
    'political': 5, 'disaster': 5, 'recession': 5,
    'macro': 4, 'innovation': 4, 'merger': 4, 'alliance': 4,
    'sector': 3,
    'sentiment': 2, 'stability': 2, 'update': 2,
    'split': 1, 'neutral': 1,
}

KEYWORD_CONCEPTS = {
    # sentiment
    'surge': 'positive', 'rally': 'positive', 'growth': 'positive', 'breakthrough': 'positive',
    'success': 'positive', 'approval': 'positive', 'boom': 'positive', 'wins': 'positive',
    'deal': 'positive', 'soars': 'positive', 'gains': 'positive', 'expansion': 'positive',
    'plummet': 'negative', 'tumbles': 'negative', 'headwinds': 'negative', 'drops': 'negative',
    'warning': 'negative', 'failure': 'negative', 'failed': 'negative', 'breach': 'negative',
    'scandal': 'negative', 'uncertainty': 'negative', 'shutdown': 'negative', 'strike': 'negative',
    'sanctions': 'negative', 'crisis': 'negative', 'lawsuit': 'negative', 'investigation': 'negative',
    'routine': 'neutral', 'maintenance': 'neutral', 'presentation': 'neutral', 'opening': 'neutral',
    # event kinds
    'innovation': 'innovation', 'patent': 'innovation', 'recession': 'recession',
    'update': 'update', 'stable': 'stability', 'split': 'split',
    'acquires': 'merger', 'acquisition': 'merger', 'merger': 'merger',
    'alliance': 'alliance', 'partnership': 'alliance',
    # sectors
    'chip': 'Technology', 'software': 'Technology', 'cyber': 'Technology', 'data': 'Technology',
    'cloud': 'Technology', 'quantum': 'Technology', 'tech': 'Technology', 'digital': 'Technology',
    'fda': 'Health', 'drug': 'Health', 'health': 'Health', 'medical': 'Health', 'clinical': 'Health',
    'pharma': 'Health', 'therapy': 'Health',
    'energy': 'Energy', 'solar': 'Energy', 'oil': 'Energy', 'nuclear': 'Energy', 'refinery': 'Energy',
    'finance': 'Finance', 'earnings': 'Finance', 'bank': 'Finance', 'sec': 'Finance', 'branch': 'Finance',
    'contract': 'Industrials', 'supply chain': 'Industrials', 'factory': 'Industrials',
    'manufacturing': 'Industrials', 'infrastructure': 'Industrials', 'shipping': 'Industrials',
    # macro
    'global': 'macro', 'market': 'macro', 'economy': 'macro', 'interest rate': 'macro',
    'jobs': 'macro', 'trade': 'macro',
    'political': 'political', 'election': 'political', 'government': 'political',
    'regulations': 'political', 'diplomatic': 'political', 'geopolitical': 'political',
    'hurricane': 'disaster', 'earthquake': 'disaster', 'wildfires': 'disaster',
    'flooding': 'disaster', 'famine': 'disaster', 'cyber attack': 'disaster',
}


def _priority(concept: Optional[str]) -> int:
    if concept is None:
        return -1
    if concept in SECTORS:
        return CONCEPT_PRIORITY['sector']
    if concept in SENTIMENTS:
        return CONCEPT_PRIORITY['sentiment']
    return CONCEPT_PRIORITY.get(concept, 0)


class KeywordImageService:
    """Builds an image search URL from the strongest concept in a headline."""

    def __init__(self, endpoint: str = IMAGE_ENDPOINT):
        self.endpoint = endpoint

    def concepts(self, headline: str, *keywords: str) -> List[str]:
        """Search terms for a headline, strongest first."""
        text = ' '.join([headline, *keywords]).lower()
        primary = None
        for keyword, concept in KEYWORD_CONCEPTS.items():
            if keyword in text and _priority(concept) > _priority(primary):
                primary = concept

        terms = []
        if primary is not None:
            terms.append(primary)
        sector = next((keyword for keyword in keywords if keyword in SECTORS), None)
        if sector and sector not in terms:
            terms.append(sector)
        if not terms and keywords:
            terms.append(keywords[0])

        terms = [term for term in terms if term not in ABSTRACT_CONCEPTS]
        return terms or ['business', 'finance']

    def lookup(self, headline: str, *keywords: str) -> str:
        query = ','.join(self.concepts(headline, *[k for k in keywords if k])[:3])
        return self.endpoint + quote(query)
