from .connection import ConnectionFactory, create_sa_engine
from .sequence import AlchemySequence, to_clause, to_order_by


__all__ = (
    "AlchemySequence",
    "ConnectionFactory",
    "create_sa_engine",
    "to_clause",
    "to_order_by",
)
