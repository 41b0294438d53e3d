# common/strategy_chain.py
# -*- coding: utf-8 -*-
"""
Ordered fallback chains.

A chain is a list of named strategies tried in order: the first one that
succeeds wins and the rest are never attempted. When every strategy fails,
the caller gets every attempt back so it can build one aggregated
diagnostic.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

module_logger = logging.getLogger(__name__)


@dataclass
class Strategy(Generic[T]):
    """
    One link of a fallback chain.

    `attempt` returns a value on success. Returning None or raising an
    exception counts as a failure and moves the chain on to the next link.
    """

    name: str
    attempt: Callable[[], Optional[T]]
    description: str = ""


@dataclass
class StrategyAttempt:
    """Outcome of a single strategy."""

    name: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class ChainResult(Generic[T]):
    """Outcome of a whole chain."""

    succeeded: bool
    strategy: Optional[str] = None
    value: Any = None
    attempts: List[StrategyAttempt] = field(default_factory=list)

    def failure_summary(self) -> List[str]:
        """One line per failed attempt, in the order they were tried."""
        lines = []
        for attempt in self.attempts:
            if attempt.succeeded:
                continue
            reason = f": {attempt.error}" if attempt.error else ""
            lines.append(f"{attempt.name} failed{reason}")
        return lines


def run_strategy_chain(
    strategies: Sequence[Strategy[T]],
    current_logger: Optional[logging.Logger] = None,
) -> ChainResult[T]:
    """
    Tries each strategy in order until one succeeds.

    Args:
        strategies: Strategies in priority order.
        current_logger: Logger for per-attempt debug lines.

    Returns:
        ChainResult describing the winning strategy, or `succeeded=False`
        with every failed attempt when the chain is exhausted.
    """
    logger_to_use = current_logger if current_logger else module_logger
    attempts: List[StrategyAttempt] = []

    for strategy in strategies:
        logger_to_use.debug(f"Trying strategy '{strategy.name}'")
        try:
            value = strategy.attempt()
        except Exception as e:
            logger_to_use.debug(
                f"Strategy '{strategy.name}' raised: {e}", exc_info=True
            )
            attempts.append(StrategyAttempt(strategy.name, False, str(e)))
            continue

        if value is None:
            attempts.append(StrategyAttempt(strategy.name, False))
            continue

        attempts.append(StrategyAttempt(strategy.name, True))
        return ChainResult(
            succeeded=True,
            strategy=strategy.name,
            value=value,
            attempts=attempts,
        )

    return ChainResult(succeeded=False, attempts=attempts)
