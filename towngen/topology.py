"""
Topology class for pathfinding
"""
from .graph import Graph


class Topology:
    """Graph over all patch vertices used to route streets and roads.

    Wall and citadel vertices are blocked (they get no node) except for
    gates. ``inner`` holds nodes of within-city patches and ``outer`` nodes
    of the countryside; vertices of the border are in neither list.
    """

    def __init__(self, model):
        self.model = model
        self.graph = Graph()
        self.pt2node = {}
        self.node2pt = {}
        self.inner = []
        self.outer = []

        blocked = set()
        if model.citadel is not None:
            blocked.update(model.citadel.shape.vertices)
        if model.wall is not None:
            blocked.update(model.wall.shape.vertices)
        blocked.difference_update(model.gates)

        border = set(model.border.shape.vertices)
        inner_seen = set()
        outer_seen = set()

        for p in model.patches:
            if len(p.shape) == 0:
                continue

            if p.within_city:
                nodes, seen = self.inner, inner_seen
            else:
                nodes, seen = self.outer, outer_seen

            v1 = p.shape.vertices[-1]
            n1 = self._process_point(v1, blocked)

            for v in p.shape.vertices:
                v0, n0 = v1, n1
                v1 = v
                n1 = self._process_point(v1, blocked)

                for vertex, node in ((v0, n0), (v1, n1)):
                    if node is not None and vertex not in border and node not in seen:
                        seen.add(node)
                        nodes.append(node)

                if n0 is not None and n1 is not None:
                    n0.link(n1, v0.distance(v1))

    def _process_point(self, v, blocked):
        if v in blocked:
            return None

        node = self.pt2node.get(v)
        if node is None:
            node = self.graph.add()
            self.pt2node[v] = node
            self.node2pt[node] = v
        return node

    def build_path(self, from_pt, to_pt, exclude=None):
        """Build path from one point to another, avoiding excluded nodes"""
        if from_pt not in self.pt2node or to_pt not in self.pt2node:
            return None

        path = self.graph.a_star(self.pt2node[from_pt], self.pt2node[to_pt], exclude)
        if path is None:
            return None

        return [self.node2pt[node] for node in path]
