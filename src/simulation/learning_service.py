"""Outcome-based learning for corporate AIs, the news model and trading agents."""
import math
from typing import Optional

from exceptions import CollaboratorError
from services.logging_service import LoggingService

CORPORATE_OUTCOME_SENSITIVITY = 5
TRADE_OUTCOME_SENSITIVITY = 10


def relative_performance(stock_return: float, market_return: float) -> float:
    """Excess performance of a stock over the market, as a ratio minus one.

    Falls back to the stock's raw return when the market return is not
    positive.
    """
    if market_return > 0:
        return stock_return / market_return - 1
    return stock_return - 1


def trade_target(entry_price: float, current_price: float, side: str) -> float:
    ret = current_price / entry_price - 1
    if side == 'sell':
        ret = -ret
    return math.tanh(TRADE_OUTCOME_SENSITIVITY * ret)


class LearningService:
    """Scores matured decisions and trains the networks behind them.

    All three passes mutate the state they are given; callers hand in a
    clone. Matured items are removed from their tracking lists whether or
    not they could be scored.
    """

    def __init__(self, text_generator):
        self.text_generator = text_generator
        self.logger = LoggingService.get_logger('learning')

    def learn_corporate_actions(self, state, new_day: int) -> int:
        """Backpropagate each matured corporate action's outcome into its network."""
        market_index = state.current_market_index
        still_tracked = []
        learned = 0
        for action in state.tracked_corporate_actions:
            if new_day < action.evaluation_day:
                still_tracked.append(action)
                continue

            stock = state.get_stock(action.stock_symbol)
            if stock is None or stock.is_delisted:
                self.logger.debug(f"Dropping {action.action_type} outcome for unavailable {action.stock_symbol}")
                continue

            stock_return = stock.current_price / action.starting_stock_price
            market_return = market_index / action.starting_market_index if action.starting_market_index else 0.0
            outcome = relative_performance(stock_return, market_return)
            target = math.tanh(CORPORATE_OUTCOME_SENSITIVITY * outcome)

            network = stock.corporate_ai.network_for(action.action_type)
            network.backpropagate(action.indicator_values, [target], stock.corporate_ai.learning_rate)
            learned += 1
            self.logger.debug(
                f"Day {new_day}: {stock.symbol} {action.action_type} outcome {outcome:+.3f} -> target {target:+.3f}"
            )
        state.tracked_corporate_actions = still_tracked
        return learned

    def learn_articles(self, state, new_day: int) -> int:
        """Feed matured article outcomes back into the text model."""
        market_index = state.current_market_index
        still_tracked = []
        learned = 0
        for article in state.tracked_articles:
            if new_day < article.evaluation_day:
                still_tracked.append(article)
                continue
            if state.text_model is None:
                continue

            market_ratio = market_index / article.starting_market_index if article.starting_market_index else 1.0
            outcome = self._article_outcome(state, article, market_ratio)
            try:
                state.text_model = self.text_generator.learn_from_outcome(
                    state.text_model, article.generated_text, outcome
                )
            except Exception as e:
                error = CollaboratorError(f"Learning from article {article.event_id} failed: {e}")
                self.logger.warning(str(error))
                continue
            learned += 1
        state.tracked_articles = still_tracked
        return learned

    def _article_outcome(self, state, article, market_ratio: float) -> float:
        if article.stock_symbol is None:
            return market_ratio
        stock = state.get_stock(article.stock_symbol)
        if stock is None or stock.is_delisted or not article.starting_stock_price:
            return 1.0
        stock_ratio = stock.current_price / article.starting_stock_price
        return stock_ratio / market_ratio if market_ratio else stock_ratio

    def learn_trades(self, state, new_day: int) -> int:
        """Train every network investor on its matured trades."""
        learned = 0
        for investor in state.investors.values():
            if investor.is_human or investor.strategy.strategy_type != 'hyperComplex':
                continue
            strategy = investor.strategy
            pending = []
            for trade in investor.recent_trades:
                if trade.outcome_evaluation_day > new_day:
                    pending.append(trade)
                    continue
                target = self._trade_target(state, trade)
                if target is None:
                    continue
                strategy.network.backpropagate(trade.indicator_values, [target], strategy.learning_rate)
                learned += 1
            investor.recent_trades = pending
        if learned:
            self.logger.debug(f"Day {new_day}: trained on {learned} matured trades")
        return learned

    def _trade_target(self, state, trade) -> Optional[float]:
        if not trade.indicator_values:
            return None
        stock = state.get_stock(trade.symbol)
        if stock is None:
            return None
        return trade_target(trade.price, stock.current_price, trade.side)
