# The registry of puzzle preset factories
PUZZLE_REGISTRY = {}

# The registry of win-predicate factories
GOAL_REGISTRY = {}

def register_puzzle(kind: str):
    def deco(fn):
        PUZZLE_REGISTRY[kind] = fn
        return fn
    return deco

def register_goal(kind: str):
    def deco(fn):
        GOAL_REGISTRY[kind] = fn
        return fn
    return deco
