"""Character-level Markov model used as a tiny news writer."""
from dataclasses import dataclass, field
from typing import Dict

MARKOV_ORDER = 6

TRAINING_CORPUS = """
Innovate Corp (INNV) shares jumped more than 12% in early trading after the company unveiled a new machine learning platform for enterprise customers. Analysts said the launch could reshape the technology sector. The chief executive told investors the product would drive growth for years to come. Trading volume ran at four times the daily average as buyers piled in.
The broader market slipped after the central bank hinted that interest rates may rise again this quarter. The market index fell 0.7% by the close. Bond yields climbed as traders priced in tighter policy, and rate-sensitive sectors led the decline.
HealthSphere (HLTH) tumbled after regulators asked for more data on its lead drug candidate. The delay raises questions about the company's revenue pipeline. Several analysts cut their price targets, citing uncertainty over the approval timeline.
Solaris Energy (SOLR) won a large contract to supply a new solar farm, sending its stock higher. The deal is the biggest in the company's history. Energy stocks broadly gained as oil prices rose on supply concerns.
FinEx Solutions (FINX) reported quarterly earnings well above expectations, helped by strong growth in its payments network. Transaction volume rose sharply from a year earlier. The company raised its full-year outlook, and shares hit a record high.
Trade talks between major economies stalled overnight, adding to uncertainty for global supply chains. Shipping and industrial companies are watching the negotiations closely. Any breakdown could weigh on exports and manufacturing output.
Quantum Leap (QUAN) and CyberSec Corp (CYBR) announced a strategic alliance to build security tools for quantum computing. Both companies said the partnership would speed development and cut costs. Investors welcomed the move, and both stocks rose.
New rules on data privacy could raise compliance costs for technology companies. DataMine Inc. (DATA) said it was reviewing the proposals. One analyst said the regulations protect consumers but may slow innovation if applied too broadly.
A political scandal has rattled investors, and market volatility is expected to stay high as details emerge. The index swung sharply in afternoon trading. Traders moved into defensive stocks and government bonds.
Economic data pointed to a slowdown after months of rapid expansion. Factory orders fell and consumer spending cooled. Cyclical stocks sold off as investors shifted toward safer assets.
A powerful storm is moving toward the coast, threatening refineries and ports. Energy futures spiked on the news. Companies in the region activated emergency plans, and insurers fell on fears of large claims.
The board of GameSphere (GAME) approved a stock split to make shares more accessible to retail investors. The split takes effect next month. Shares rose modestly, as splits do not change the value of the company.
AeroDynamics (AERO) agreed to acquire a smaller rival in a deal that consolidates its position in the aerospace market. The acquisition is expected to close later this year. The target company's shares jumped on the announcement.
A cyber attack disrupted services at several banks, including Nexus Capital (NEXS). The source of the attack is unknown. Services are slowly being restored, and regulators said they are monitoring the situation.
A breakthrough in diplomatic talks eased long-running tensions between rival nations. Markets in Europe and Asia rallied, with financial and industrial stocks leading the gains. Investors said the news boosted confidence in the global economy.
Severe drought across farming regions is pushing up commodity prices. International agencies warned of food shortages. Companies that rely on agricultural inputs face rising costs in the months ahead.
"""


@dataclass
class MicroLLM:
    """Transition weights keyed by the previous ``order`` characters"""
    transition_table: Dict[str, Dict[str, float]] = field(default_factory=dict)
    order: int = MARKOV_ORDER

    def clone(self) -> 'MicroLLM':
        return MicroLLM(
            transition_table={gram: dict(nexts) for gram, nexts in self.transition_table.items()},
            order=self.order,
        )

    def scale_transitions(self, text: str, factor: float, floor: float = 0.0) -> None:
        """Multiply the weight of every known transition that ``text`` walks through."""
        for i in range(len(text) - self.order):
            gram = text[i:i + self.order]
            next_char = text[i + self.order]
            weights = self.transition_table.get(gram)
            if weights and weights.get(next_char):
                weights[next_char] = max(floor, weights[next_char] * factor)


def build_model(corpus: str = TRAINING_CORPUS, order: int = MARKOV_ORDER) -> MicroLLM:
    table: Dict[str, Dict[str, float]] = {}
    for i in range(len(corpus) - order):
        gram = corpus[i:i + order]
        next_char = corpus[i + order]
        weights = table.setdefault(gram, {})
        weights[next_char] = weights.get(next_char, 0) + 1
    return MicroLLM(transition_table=table, order=order)
