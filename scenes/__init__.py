"""scenes — pygame screens.

colony_scene   live view of a ColonySim (steps it, draws snapshots)
colony_draw    pure draw helpers used by the colony scene
"""
