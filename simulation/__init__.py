"""simulation — Colony job scheduling and the session facade.

Submodules
----------
fixtures     FixtureShape, Fixture, Room and the built-in shapes
colony_map   ColonyMap (walkability, rooms, doors), Door
jobs         TransportJob, ProductionJob, JobTable, Unassigned diagnostics
scheduler    JobScheduler — per-tick matching of needs to colonists
world_sim    ColonySim — registers resources, steps, snapshots
layout       hand-authored demo colony
"""
