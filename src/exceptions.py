"""Exception types shared by the simulation services."""


class SimulationError(Exception):
    """Base class for engine errors."""


class OrderRejected(SimulationError):
    """Raised by the trade execution service when an order cannot be filled.

    The public API converts this into "return the prior state unchanged".
    """

    def __init__(self, reason: str, investor_id: str = None, symbol: str = None):
        super().__init__(reason)
        self.reason = reason
        self.investor_id = investor_id
        self.symbol = symbol


class CollaboratorError(SimulationError):
    """A narrative collaborator (text generation, image lookup) failed."""
