"""Constants and mappings for the team draw engine."""

# Sort keys accepted by every skill-ordered strategy
SORT_COMBO = 'combo'
SORT_PPD = 'ppd'
SORT_MPR = 'mpr'
SORT_KEYS = (SORT_COMBO, SORT_PPD, SORT_MPR)

# Multiplier applied to MPR when building the combo score
MPR_WEIGHT = 10

# Group role names
GROUP_A = 'A'
GROUP_B = 'B'
GROUP_C = 'C'
GROUP_PLAYER1 = 'player1'
GROUP_PLAYER2 = 'player2'
GROUP_AVAILABLE = 'available'

# Pseudo-team used to persist the pick pool of the pick strategies
AVAILABLE_TEAM_NAME = 'Available'

# Separator between member first names in a team name
TEAM_NAME_JOINER = ' and '

# Strategy key -> display name, in the order offered when creating a tournament
TOURNAMENT_TYPES = {
    'ab_draw': 'A/B Draw',
    'blind_draw': 'Blind Draw',
    'partner_bring': 'Partner Bring',
    'parity_draw': 'Parity Draw',
    'low_player_pick': 'Low Player Pick',
    'high_player_pick': 'High Player Pick',
    'abc_draw_trios': 'A/B/C Draw Trios',
}

# Reverse mapping
DISPLAY_NAME_TO_TYPE = {v: k for k, v in TOURNAMENT_TYPES.items()}

# Payout defaults (overridable through tournament_config.json)
GOLDEN_RATIO = 1.618
ROUNDING_UNIT = 10
FLOOR_MULTIPLIER = 2
PLATEAU_START_INDEX = 4

ORDINAL_SUFFIXES = ['th', 'st', 'nd', 'rd']
