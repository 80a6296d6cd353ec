"""
Delivery route planning package.

Three-layer architecture:
- core: Coordinates, segments, routes, commands, street graph, map data
- algorithms: A* routing, simulated annealing stop ordering, narration
- app: High-level delivery planning application and CLI

Examples
--------
>>> from delivery_routing.core import load_street_map, load_deliveries
>>> from delivery_routing.app import DeliveryPlanner, PlannerConfig
>>> graph = load_street_map("mapdata.txt")
>>> depot, stops = load_deliveries("deliveries.txt")
>>> result = DeliveryPlanner(graph, PlannerConfig(random_seed=1)).plan(depot, stops)
"""

__version__ = "2025dev"
