import networkx as nx
from typing import Tuple

class RoadNetwork:
    def __init__(self):
        self.graph = nx.DiGraph()

    def add_intersection(self, intersection_id: str, pos: Tuple[float, float]):
        self.graph.add_node(intersection_id, pos=pos, type="intersection")

    def add_road(self, u: str, v: str, road_id: str, length: float, boundary: bool = False):
        self.graph.add_edge(u, v, id=road_id, length=length, boundary=boundary)

    def get_node_pos(self, u: str) -> Tuple[float, float]:
        return self.graph.nodes[u].get('pos', (0.0, 0.0))

    def boundary_roads(self):
        return [data["id"] for _, _, data in self.graph.edges(data=True) if data.get("boundary")]

    def is_strongly_connected(self) -> bool:
        if self.graph.number_of_nodes() == 0:
            return False
        return nx.is_strongly_connected(self.graph)
