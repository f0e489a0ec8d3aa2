"""Constants and token vocabularies for the statdrop engine."""

from pathlib import Path

PROJECT_DIR = Path(__file__).parent.parent
DATA_DIR = PROJECT_DIR / 'data'

# Raw position variants -> canonical position name
POSITION_ALIASES = {
    # Offense
    'QB': 'QB',
    'RB': 'RB',
    'HB': 'RB',
    'FB': 'RB',
    'WR': 'WR',
    'TE': 'TE',
    'K': 'K',
    'PK': 'K',
    # Defensive line
    'DL': 'DL',
    'DE': 'DL',
    'DT': 'DL',
    'NT': 'DL',
    'EDGE': 'DL',
    'LE': 'DL',
    'RE': 'DL',
    # Linebackers
    'LB': 'LB',
    'OLB': 'LB',
    'MLB': 'LB',
    'ILB': 'LB',
    'SLB': 'LB',
    'WLB': 'LB',
    # Defensive backs
    'DB': 'DB',
    'CB': 'DB',
    'S': 'DB',
    'FS': 'DB',
    'SS': 'DB',
    'NB': 'DB',
    'DBS': 'DB',
}

OFFENSIVE_POSITIONS = ('QB', 'RB', 'WR', 'TE', 'K')
DEFENSIVE_POSITIONS = ('DL', 'LB', 'DB')
STAT_POSITIONS = OFFENSIVE_POSITIONS + DEFENSIVE_POSITIONS

# Lineup slot tokens as produced by the fantasy platform
FIXED_SLOTS = ('QB', 'RB', 'WR', 'TE', 'K', 'DL', 'LB', 'DB')
OFFENSE_FLEX_SLOTS = ('FLEX', 'WRRB', 'WRRBTE', 'WRRB_TE', 'RBWR', 'RBWRTE')
SUPER_FLEX_SLOTS = ('SUPER_FLEX', 'QBRBWRTE', 'QBRBWR', 'QBSF', 'SFLX')
IDP_FLEX_SLOTS = ('IDP', 'IDPFLEX', 'IDP_FLEX', 'DFLEX', 'DL_LB_DB', 'DL_LB', 'LB_DB', 'DL_DB')
NON_STARTING_SLOTS = (
    'BN',
    'BENCH',
    'IR',
    'TAXI',
    'TAXI_SLOT',
    'TAXI-SLOT',
    'TAXI SLOT',
    'RESERVE',
    'RESERVED',
    'PUP',
    'OUT',
)

# Sleeper marks an empty starting slot with this player id
EMPTY_STARTER_ID = '0'

# Defaults used when a season record omits its playoff settings
DEFAULT_PLAYOFF_START_WEEK = 14
DEFAULT_PLAYOFF_TEAMS_COUNT = 4

# Max slots per position when a lineup has to be inferred from a roster
INFERRED_SLOT_CAP = 3
