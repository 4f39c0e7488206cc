"""
main.py — Bootstrap

1. Load tuning
2. Open a window sized to the demo map
3. Build the demo colony on the app's world
4. Push the colony scene
5. Run
"""

from core import tuning
from core.app import App
from scenes.colony_scene import ColonyScene
from simulation.layout import BOUNDS, build_demo_colony


def main():
    tuning.load()

    app = App.for_map(BOUNDS)
    sim = build_demo_colony(app.world)

    app.push_scene(ColonyScene(sim))
    app.run()


if __name__ == "__main__":
    main()
