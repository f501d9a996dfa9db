import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from agents.agents_api import OrderDetails
from agents.investor import HyperComplexStrategy, Investor, RandomStrategy
from constants import TRADING_SESSION_HOURS
from exceptions import OrderRejected
from market.engine.services.trade_execution_service import TradeExecutionService
from market.indicators.technical_indicators import calculate_indicators, indicator_vector
from market.market_hours import is_market_open
from market.trade import Trade
from services.logging_service import LoggingService


@dataclass
class TickFlows:
    """Executed volume and net buying per symbol during one tick"""
    volumes: Dict[str, int] = field(default_factory=dict)
    net_buys: Dict[str, int] = field(default_factory=dict)
    trades: List[Trade] = field(default_factory=list)

    def record(self, trade: Trade) -> None:
        self.volumes[trade.symbol] = self.volumes.get(trade.symbol, 0) + trade.shares
        self.net_buys[trade.symbol] = self.net_buys.get(trade.symbol, 0) + trade.signed_shares
        self.trades.append(trade)


class AgentDecisionService:
    """Service for collecting and executing AI investor decisions each tick.

    Dispatches on ``strategy.strategy_type``:
    - hyperComplex: score every open stock with the investor's network
    - random: noise trading at ``trade_chance`` per open stock
    - simple / complex: reserved tiers, never trade
    """

    def __init__(self, config, rng, indicator_names: List[str],
                 execution_service: Optional[TradeExecutionService] = None):
        self.config = config
        self.rng = rng
        self.indicator_names = indicator_names
        self.execution_service = execution_service or TradeExecutionService()
        self.logger = LoggingService.get_logger('trading')

    def run_agents(self, state, moment: datetime, tick_hours: float) -> TickFlows:
        """Let every non-human investor act once; mutates ``state`` in place."""
        flows = TickFlows()
        session_share = tick_hours / TRADING_SESSION_HOURS
        open_stocks = [
            stock for stock in state.stocks.values()
            if not stock.is_delisted and is_market_open(moment, stock.region)
        ]
        if not open_stocks:
            return flows

        for investor in state.investors.values():
            if investor.is_human:
                continue
            strategy = investor.strategy
            if strategy.strategy_type == 'hyperComplex':
                self._run_network_investor(state, investor, strategy, open_stocks, moment, session_share, flows)
            elif strategy.strategy_type == 'random':
                self._run_noise_trader(state, investor, strategy, open_stocks, moment, session_share, flows)
            # 'simple' and 'complex' carry no trading logic
        return flows

    def _run_network_investor(self, state, investor: Investor, strategy: HyperComplexStrategy,
                              open_stocks, moment, session_share: float, flows: TickFlows):
        trade_chance = (1 / strategy.trade_frequency) * session_share
        if self.rng.random() > trade_chance:
            return

        all_stocks = list(state.stocks.values())
        for stock in open_stocks:
            indicators = calculate_indicators(stock, all_stocks, state.event_history)
            inputs = indicator_vector(indicators, self.indicator_names)
            score = strategy.network.feed_forward(inputs)[0]
            price = stock.current_price

            order = None
            if score > strategy.risk_aversion:
                max_spend = investor.cash * self.config.agent_buy_fraction * session_share
                shares = math.floor(max_spend / price)
                if shares > 0:
                    order = OrderDetails(decision="Buy", quantity=shares, stock_id=stock.symbol,
                                         indicators=indicators, indicator_values=inputs)
            elif score < -strategy.risk_aversion:
                held = investor.shares_owned(stock.symbol)
                shares = math.floor(held * self.config.agent_sell_fraction * session_share)
                if held > 0 and shares > 0:
                    order = OrderDetails(decision="Sell", quantity=shares, stock_id=stock.symbol,
                                         indicators=indicators, indicator_values=inputs)
            if order is not None:
                self._execute(state, investor, order, moment, flows)

    def _run_noise_trader(self, state, investor: Investor, strategy: RandomStrategy,
                          open_stocks, moment, session_share: float, flows: TickFlows):
        for stock in open_stocks:
            if self.rng.random() >= strategy.trade_chance * session_share:
                continue
            price = stock.current_price
            held = investor.shares_owned(stock.symbol)
            should_buy = self.rng.random() < 0.5

            order = None
            if should_buy and investor.cash > self.config.noise_trader_min_cash:
                spend = investor.cash * (self.rng.random() * self.config.noise_trader_max_fraction)
                shares = math.floor(spend / price)
                if shares > 0:
                    order = OrderDetails(decision="Buy", quantity=shares, stock_id=stock.symbol)
            elif not should_buy and held > 0:
                fraction = self.rng.random() * self.config.noise_trader_max_fraction
                shares = min(held, max(1, math.floor(held * fraction)))
                order = OrderDetails(decision="Sell", quantity=shares, stock_id=stock.symbol)
            if order is not None:
                self._execute(state, investor, order, moment, flows)

    def _execute(self, state, investor: Investor, order: OrderDetails, moment, flows: TickFlows):
        try:
            trade = self.execution_service.execute_order(state, investor.id, order, moment)
        except OrderRejected as e:
            self.logger.debug(f"Agent order rejected for {investor.id}: {e.reason}")
            return
        flows.record(trade)
