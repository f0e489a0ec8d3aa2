"""Canonical fantasy positions and raw-token normalization."""

from enum import Enum

from .constants import DEFENSIVE_POSITIONS, OFFENSIVE_POSITIONS, POSITION_ALIASES


class Position(str, Enum):
    """Closed vocabulary of positions the engine keeps statistics for."""

    QB = 'QB'
    RB = 'RB'
    WR = 'WR'
    TE = 'TE'
    K = 'K'
    DL = 'DL'
    LB = 'LB'
    DB = 'DB'
    UNK = 'UNK'

    def __str__(self) -> str:
        return self.value

    @property
    def is_offense(self) -> bool:
        return self.value in OFFENSIVE_POSITIONS

    @property
    def is_defense(self) -> bool:
        return self.value in DEFENSIVE_POSITIONS


def normalize(raw: 'str | Position | None') -> Position:
    """
    Map a raw position token to its canonical Position.

    Matching is case-insensitive and ignores surrounding whitespace. Known
    variants collapse onto their group (DE/DT/NT -> DL, OLB/MLB -> LB,
    CB/S -> DB). Team-defense and generic tokens (DEF, D/ST, IDP) are not
    individual positions and, like anything unrecognized, become UNK.

    Args:
        raw: Raw token from a roster, player cache, or slot list

    Returns:
        Canonical Position (never raises)

    Example:
        normalize('olb')  # Position.LB
        normalize(None)   # Position.UNK
    """
    if isinstance(raw, Position):
        return raw
    if not raw:
        return Position.UNK
    token = str(raw).strip().upper()
    canonical = POSITION_ALIASES.get(token)
    if canonical is None:
        return Position.UNK
    return Position(canonical)


def normalize_all(raw_tokens) -> list[Position]:
    """Normalize a sequence of tokens, keeping order and duplicates."""
    return [normalize(token) for token in raw_tokens or ()]
