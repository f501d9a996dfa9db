from datetime import datetime
from typing import Optional

from accounting.lot_accounting import add_lot, consume_lots_fifo, record_realized_gain
from agents.agents_api import OrderDetails
from agents.investor import RecentTrade
from constants import TRADE_EVALUATION_HORIZON
from exceptions import OrderRejected
from market.market_hours import is_market_open
from market.trade import Trade
from services.logging_service import LoggingService


class TradeExecutionService:
    """Fills market orders against the current close.

    Orders fill immediately at the last close; there is no counterparty. The
    service mutates the investor it is handed, so callers pass an investor
    belonging to a state they own (a clone).
    """

    def __init__(self, long_term_holding_days: int = 365):
        self.long_term_holding_days = long_term_holding_days
        self.logger = LoggingService.get_logger('trading')

    def execute_order(
        self,
        state,
        investor_id: str,
        order: OrderDetails,
        moment: Optional[datetime] = None,
        source: str = 'agent',
        enforce_market_hours: bool = True,
    ) -> Trade:
        """Execute ``order`` for ``investor_id`` inside ``state``.

        Args:
            state: SimulationState owned by the caller
            investor_id: Investor placing the order
            order: Validated order
            moment: Time of execution (defaults to ``state.time``)
            source: 'agent' or 'player', recorded on the trade
            enforce_market_hours: Reject orders for stocks whose region is closed

        Returns:
            The executed Trade

        Raises:
            OrderRejected: If the order cannot be filled; nothing is mutated
        """
        moment = moment if moment is not None else state.time
        investor = state.get_investor(investor_id)
        if investor is None:
            raise OrderRejected(f"Unknown investor {investor_id}", investor_id, order.stock_id)

        stock = state.get_stock(order.stock_id)
        if stock is None:
            raise OrderRejected(f"Unknown symbol {order.stock_id}", investor_id, order.stock_id)
        if stock.is_delisted:
            raise OrderRejected(f"{order.stock_id} is delisted", investor_id, order.stock_id)
        if enforce_market_hours and not is_market_open(moment, stock.region):
            raise OrderRejected(f"{stock.region} market is closed", investor_id, order.stock_id)

        price = stock.current_price
        shares = order.quantity

        if order.side == 'buy':
            cost = shares * price
            if investor.cash < cost:
                raise OrderRejected(
                    f"Insufficient cash: need ${cost:,.2f}, have ${investor.cash:,.2f}",
                    investor_id, order.stock_id
                )
            investor.cash -= cost
            add_lot(investor, stock.symbol, shares, price, moment, order.indicators)
        else:
            held = investor.shares_owned(stock.symbol)
            if held < shares:
                raise OrderRejected(
                    f"Insufficient shares: want to sell {shares}, hold {held}",
                    investor_id, order.stock_id
                )
            investor.cash += shares * price
            gain = consume_lots_fifo(
                investor, stock.symbol, shares, price, moment, self.long_term_holding_days
            )
            record_realized_gain(investor, gain)

        if investor.strategy.strategy_type == 'hyperComplex' and order.indicator_values:
            investor.recent_trades.append(RecentTrade(
                symbol=stock.symbol,
                day=state.day,
                side=order.side,
                shares=shares,
                price=price,
                indicator_values=list(order.indicator_values),
                outcome_evaluation_day=state.day + TRADE_EVALUATION_HORIZON,
            ))

        trade = Trade(
            investor_id=investor_id,
            symbol=stock.symbol,
            side=order.side,
            shares=shares,
            price=price,
            timestamp=moment,
            day=state.day,
            source=source,
        )
        LoggingService.log_trade(trade)
        return trade
