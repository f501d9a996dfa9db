from typing import Dict, List, Literal

from pydantic import BaseModel, Field, model_validator


class OrderDetails(BaseModel):
    """Individual order details

    Market orders only: every order fills at the stock's current close.
    ``indicators`` and ``indicator_values`` carry the decision inputs so a
    filled buy can snapshot them on its lot and a network-driven trade can be
    scored later.
    """
    decision: Literal["Buy", "Sell"]
    quantity: int
    stock_id: str
    indicators: Dict[str, float] = Field(default_factory=dict)
    indicator_values: List[float] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_order_details(self):
        """Validate individual order details"""
        if self.quantity <= 0:
            raise ValueError("quantity must be positive for all orders")
        if not self.stock_id:
            raise ValueError("stock_id must be set")
        return self

    @property
    def side(self) -> str:
        return self.decision.lower()
