from grid import parse_arena

# Two steps right, then one down onto the goal
level1 = """
#####
#R..#
###G#
#####
"""

# The conveyor chain carries the robot to the goal
conveyor_level = """
#######
#R.>>v#
#####v#
#####G#
#######
"""

# Hazard row under the corridor
hazard_level = """
######
#R..G#
#XXXX#
######
"""

sign_level = """
#####
#R1G#
#####
"""

SIGNS = {
    'sign_level': {'1': "almost there"},
}

LEVELS = {
    'level1': level1,
    'conveyor_level': conveyor_level,
    'hazard_level': hazard_level,
    'sign_level': sign_level,
}


def load_level(name):
    if name not in LEVELS:
        raise KeyError(f"unknown level {name!r}, choose from {', '.join(sorted(LEVELS))}")
    return parse_arena(LEVELS[name], signs=SIGNS.get(name))
