"""Trace-id ratio sampler that propagates its rate through the trace state."""

from __future__ import annotations

import math
from numbers import Real
from typing import Optional, Sequence

from opentelemetry.context import Context
from opentelemetry.sdk.trace.sampling import Sampler, SamplingResult
from opentelemetry.trace import Link, SpanKind, TraceState, get_current_span
from opentelemetry.util.types import Attributes

from traceratio.errors import ConfigurationError
from traceratio.sampling.decision import decide, get_bound_for_rate
from traceratio.sampling.reconcile import reconcile_rate

SAMPLE_RATE_KEY = "_sample_rate"


def validate_probability(rate: float) -> float:
    """
    Validate a sampling probability.

    Args:
        rate: Probability between 0.0 and 1.0 (inclusive)

    Returns:
        The probability as a float

    Raises:
        ConfigurationError: If rate is not a number in [0.0, 1.0]
    """
    if isinstance(rate, bool) or not isinstance(rate, Real):
        raise ConfigurationError(
            "probability must be a number between 0.0 and 1.0",
            details={"probability": rate},
        )
    rate = float(rate)
    if math.isnan(rate) or rate < 0.0 or rate > 1.0:
        raise ConfigurationError(
            "probability must be between 0.0 and 1.0",
            details={"probability": rate},
        )
    return rate


class ConsistentRateSampler(Sampler):
    """
    Samples traces by trace id at a rate shared by every service of the trace.

    A root span is sampled at the configured probability and the probability
    is written into the ``dd`` trace state entry. Descendant spans, in this
    process or downstream ones, reuse the inherited rate instead. The
    effective rate is recorded on the span as ``_sample_rate``.

    Example::

        provider = TracerProvider(sampler=ConsistentRateSampler(0.01))
    """

    def __init__(self, rate: float) -> None:
        """
        Args:
            rate: Probability between 0.0 and 1.0 (inclusive)

        Raises:
            ConfigurationError: If rate is outside [0.0, 1.0]
        """
        self._rate = validate_probability(rate)
        self._bound = get_bound_for_rate(self._rate)

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def bound(self) -> int:
        return self._bound

    def should_sample(
        self,
        parent_context: Optional[Context],
        trace_id: int,
        name: str,
        kind: Optional[SpanKind] = None,
        attributes: Attributes = None,
        links: Optional[Sequence[Link]] = None,
        trace_state: Optional[TraceState] = None,
    ) -> SamplingResult:
        """
        Decide whether a new span is sampled.

        The parent span's trace state takes precedence over ``trace_state``;
        the latter is only consulted when there is no valid parent. ``kind``
        and ``links`` do not influence the decision.

        Returns:
            SamplingResult carrying the decision, the caller's attributes plus
            ``_sample_rate``, and the trace state to hand to child spans
        """
        parent_span_context = get_current_span(parent_context).get_span_context()
        if parent_span_context.is_valid:
            trace_state = parent_span_context.trace_state

        reconciled = reconcile_rate(trace_state, self._rate)
        if reconciled.inherited:
            bound = get_bound_for_rate(reconciled.rate)
        else:
            bound = self._bound

        decision = decide(trace_id, bound)

        new_attributes = dict(attributes) if attributes else {}
        new_attributes[SAMPLE_RATE_KEY] = reconciled.rate

        return SamplingResult(decision, new_attributes, reconciled.trace_state)

    def get_description(self) -> str:
        return f"{type(self).__name__}{{{self._rate:.6f}}}"

    describe = get_description
