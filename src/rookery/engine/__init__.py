"""Move policies ("engines") and the registry a UI cycles through.

The Qt worker lives in :mod:`rookery.engine.qt_bridge` and is not imported
here, so this package works without PyQt6 installed.
"""

from __future__ import annotations

from collections.abc import Callable

from rookery.engine.policy import MovePolicy, PolicyLimits, ordered_moves
from rookery.engine.simple import CapturePreferringPolicy, FirstMovePolicy, RandomPolicy

PolicyFactory = Callable[[PolicyLimits], MovePolicy]

# Insertion order is the order a UI cycles through the engines.
AVAILABLE_POLICIES: dict[str, PolicyFactory] = {
    FirstMovePolicy.name: lambda limits: FirstMovePolicy(),
    RandomPolicy.name: lambda limits: RandomPolicy(limits.seed),
    CapturePreferringPolicy.name: lambda limits: CapturePreferringPolicy(limits.seed),
}

DefaultPolicy: type[RandomPolicy] = RandomPolicy


def policy_by_name(name: str, limits: PolicyLimits | None = None) -> MovePolicy:
    """Build the registered policy called *name*.

    Raises:
        KeyError: if no policy has that name.
    """
    try:
        factory = AVAILABLE_POLICIES[name]
    except KeyError:
        known = ", ".join(AVAILABLE_POLICIES)
        raise KeyError(f"Unknown policy {name!r} (known: {known})") from None
    return factory(limits or PolicyLimits())


def next_policy_name(current: str) -> str:
    """The registry entry after *current*, wrapping around."""
    names = list(AVAILABLE_POLICIES)
    return names[(names.index(current) + 1) % len(names)]


__all__ = [
    "AVAILABLE_POLICIES",
    "CapturePreferringPolicy",
    "DefaultPolicy",
    "FirstMovePolicy",
    "MovePolicy",
    "PolicyFactory",
    "PolicyLimits",
    "RandomPolicy",
    "next_policy_name",
    "ordered_moves",
    "policy_by_name",
]
